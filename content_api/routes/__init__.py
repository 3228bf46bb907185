"""HTTP routers, registered by content_api.main.create_app in this order."""

from content_api.routes import (
    auth,
    campaigns,
    categories,
    channels,
    health,
    oauth,
    revenues,
    tasks,
    users,
    videos,
)

ROUTERS = [
    health.router,
    auth.router,
    users.router,
    channels.router,
    categories.router,
    videos.router,
    campaigns.router,
    revenues.router,
    tasks.router,
    oauth.router,
]

__all__ = ["ROUTERS"]
