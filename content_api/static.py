"""Single-page frontend hosting.

When the bundled frontend directory exists it is mounted at ``/`` after every
API and documentation route, so those always win. Unknown paths that look
like client-side routes (no file extension, outside ``api/``) fall back to
``index.html`` so the frontend router can handle them.
"""

import os
from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_FILE = "index.html"
API_PREFIX = "api/"


class SpaStaticFiles(StaticFiles):
    """StaticFiles that serves ``index.html`` for unmatched client routes."""

    def __init__(self, directory: Path) -> None:
        self.index_path = Path(directory) / INDEX_FILE
        super().__init__(directory=str(directory), html=True)

    @staticmethod
    def is_client_route(path: str) -> bool:
        path = path.lstrip("/")
        if path == API_PREFIX.rstrip("/") or path.startswith(API_PREFIX):
            return False
        return os.path.splitext(path)[1] == ""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as e:
            if (
                e.status_code == 404
                and scope["method"] in ("GET", "HEAD")
                and self.is_client_route(path)
                and self.index_path.is_file()
            ):
                return FileResponse(self.index_path)
            raise


def mount_frontend(app, directory: str | Path) -> bool:
    """Mount ``directory`` at ``/`` if it exists.

    Must be called after all routers are included.

    Returns:
        True if the frontend was mounted.
    """
    path = Path(directory)
    if not path.is_dir():
        return False
    app.mount("/", SpaStaticFiles(path), name="frontend")
    return True
