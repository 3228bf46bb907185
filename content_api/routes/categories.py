"""Video category routes."""

import uuid

from fastapi import APIRouter, Depends, status

from content_api.auth import get_current_user
from content_api.dependencies import get_category_service
from content_api.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from content_api.services import VideoCategoryService

router = APIRouter(
    prefix="/api/categories", tags=["categories"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(service: VideoCategoryService = Depends(get_category_service)) -> list:
    return await service.list_categories()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate, service: VideoCategoryService = Depends(get_category_service)
):
    return await service.create_category(data)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: uuid.UUID, service: VideoCategoryService = Depends(get_category_service)
):
    return await service.get_category(category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    data: CategoryUpdate,
    service: VideoCategoryService = Depends(get_category_service),
):
    return await service.update_category(category_id, data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: uuid.UUID, service: VideoCategoryService = Depends(get_category_service)
) -> None:
    await service.delete_category(category_id)
