"""YouTube Content API.

FastAPI backend for tracking YouTube channels, videos, AdSense campaigns and
revenue, and the internal task workflow of the staff producing the content.
State lives in PostgreSQL (SQLite for development and tests) behind async
SQLAlchemy; ``content_api.main`` is the composition root.
"""

__version__ = "1.0.0"
