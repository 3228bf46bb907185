"""Data access layer: a generic repository plus per-entity specializations."""

from content_api.repositories.base import Repository
from content_api.repositories.campaign_repository import AdSenseCampaignRepository
from content_api.repositories.revenue_repository import AdRevenueRepository, RevenueTotals
from content_api.repositories.task_repository import TaskCommentRepository, TaskRepository
from content_api.repositories.user_repository import UserRepository
from content_api.repositories.video_repository import VideoRepository

__all__ = [
    "AdRevenueRepository",
    "AdSenseCampaignRepository",
    "Repository",
    "RevenueTotals",
    "TaskCommentRepository",
    "TaskRepository",
    "UserRepository",
    "VideoRepository",
]
