"""FastAPI application factory for the watchlist backend."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from watchlist_tracker.api.routes.blogs import router as blogs_router
from watchlist_tracker.api.routes.watchlist import router as watchlist_router
from watchlist_tracker.storage.blog_store import BlogStore
from watchlist_tracker.storage.watchlist_store import WatchlistStore


def create_app(db_path: Path) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite database file shared by the watchlist and blog stores.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Watchlist Tracker API",
        version="0.1.0",
        description="Watchlist snapshots and blog storage",
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    # Initialize stores and attach to app state
    watchlist_store = WatchlistStore(db_path)
    watchlist_store.initialize_schema()
    blog_store = BlogStore(db_path)
    blog_store.initialize_schema()
    app.state.watchlist_store = watchlist_store
    app.state.blog_store = blog_store

    # Register routers
    app.include_router(watchlist_router, prefix="/api")
    app.include_router(blogs_router, prefix="/api")

    @app.get("/api/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
