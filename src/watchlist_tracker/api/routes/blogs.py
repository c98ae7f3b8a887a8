"""Blog and image API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from watchlist_tracker.api.schemas import (
    BlogListResponse,
    BlogRequest,
    BlogResponse,
    BlogSavedResponse,
    MessageResponse,
    blog_summary_to_response,
    blog_to_response,
)
from watchlist_tracker.storage.blog_store import BlogStore

router = APIRouter(tags=["blogs"])

REQUIRED_FIELDS_MESSAGE = "Title and content are required"


def _get_store(request: Request) -> BlogStore:
    """Resolve BlogStore from app state."""
    return request.app.state.blog_store  # type: ignore[no-any-return]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/blogs", response_model=BlogSavedResponse)
def create_blog(request: Request, body: BlogRequest) -> BlogSavedResponse | JSONResponse:
    """Create a blog, extracting embedded images."""
    if not body.title or not body.content:
        return _error(400, REQUIRED_FIELDS_MESSAGE)
    try:
        blog_id = _get_store(request).create(body.title, body.content)
    except ValueError as e:
        return _error(400, str(e))
    return BlogSavedResponse(blog_id=blog_id)


@router.put("/blogs/{blog_id}", response_model=BlogSavedResponse)
def update_blog(request: Request, blog_id: int, body: BlogRequest) -> BlogSavedResponse | JSONResponse:
    """Replace a blog's title, content and images."""
    if not body.title or not body.content:
        return _error(400, REQUIRED_FIELDS_MESSAGE)
    try:
        updated = _get_store(request).update(blog_id, body.title, body.content)
    except ValueError as e:
        return _error(400, str(e))
    if not updated:
        return _error(404, "Blog not found")
    return BlogSavedResponse(blog_id=blog_id)


@router.get("/blogs", response_model=BlogListResponse)
def list_blogs(request: Request) -> BlogListResponse:
    """List blogs, newest first."""
    return BlogListResponse(blogs=[blog_summary_to_response(b) for b in _get_store(request).list_blogs()])


@router.get("/blogs/{blog_id}", response_model=BlogResponse)
def get_blog(request: Request, blog_id: int) -> BlogResponse | JSONResponse:
    blog = _get_store(request).get_blog(blog_id)
    if blog is None:
        return _error(404, "Blog not found")
    return blog_to_response(blog)


@router.delete("/blogs/{blog_id}", response_model=MessageResponse)
def delete_blog(request: Request, blog_id: int) -> MessageResponse | JSONResponse:
    """Delete a blog; its images are removed with it."""
    if not _get_store(request).delete(blog_id):
        return _error(404, "Blog not found")
    return MessageResponse(message="Blog deleted")


@router.get("/images/{image_id}", response_class=Response)
def get_image(request: Request, image_id: int) -> Response:
    """Serve a stored image with its MIME type."""
    image = _get_store(request).get_image(image_id)
    if image is None:
        return _error(404, "Image not found")
    return Response(content=image.data, media_type=image.mime_type)
