"""Business services.

Each service is constructed per request from the request's session (see
content_api.dependencies) and raises domain exceptions from
content_api.exceptions; routes never touch repositories directly.
"""

from content_api.services.auth_service import AuthService
from content_api.services.campaign_service import AdSenseCampaignService
from content_api.services.category_service import VideoCategoryService
from content_api.services.channel_service import YouTubeChannelService
from content_api.services.oauth_service import GoogleOAuthService
from content_api.services.revenue_service import AdRevenueService
from content_api.services.task_service import TaskService
from content_api.services.user_service import UserService
from content_api.services.video_service import VideoService

__all__ = [
    "AdRevenueService",
    "AdSenseCampaignService",
    "AuthService",
    "GoogleOAuthService",
    "TaskService",
    "UserService",
    "VideoCategoryService",
    "VideoService",
    "YouTubeChannelService",
]
