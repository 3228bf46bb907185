"""User administration routes (admin only, except the employee picker)."""

import uuid

from fastapi import APIRouter, Depends, Query, status

from content_api.auth import AuthenticatedUser, get_current_user, require_admin
from content_api.dependencies import get_user_service
from content_api.models import UserRole
from content_api.schemas.user import EmployeeSummary, UserResponse, UserUpdate
from content_api.services import UserService

router = APIRouter(
    prefix="/api/users", tags=["users"], dependencies=[Depends(get_current_user)]
)


@router.get("/employees", response_model=list[EmployeeSummary])
async def list_employees(service: UserService = Depends(get_user_service)) -> list:
    """Active users available as task assignees. Open to every authenticated user."""
    return await service.list_employees()


@router.get("", response_model=list[UserResponse], dependencies=[Depends(require_admin)])
async def list_users(
    role: UserRole | None = None,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    service: UserService = Depends(get_user_service),
) -> list:
    return await service.list_users(role=role, offset=offset, limit=limit)


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(require_admin)])
async def get_user(user_id: uuid.UUID, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: uuid.UUID,
    data: UserUpdate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return await service.update_user(user_id, data, acting_user_id=admin.id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: uuid.UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> None:
    await service.delete_user(user_id, acting_user_id=admin.id)
