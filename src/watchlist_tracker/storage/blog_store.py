"""SQLite blog store with embedded-image extraction."""

from __future__ import annotations

import base64
import binascii
import logging
import re
import sqlite3
from dataclasses import dataclass

from watchlist_tracker.storage.base import SQLiteStore
from watchlist_tracker.storage.schema import ALL_BLOG_DDL

logger = logging.getLogger(__name__)

DATA_URI_PATTERN = re.compile(r'src="data:(image/[^;]+);base64,([^"]+)"')
IMAGE_URL_TEMPLATE = "/api/images/{image_id}"


@dataclass
class EmbeddedImage:
    """A base64 image found inside blog HTML."""

    mime_type: str
    data: bytes
    original_url: str


@dataclass
class BlogSummary:
    id: int
    title: str
    created_at: str


@dataclass
class Blog:
    id: int
    title: str
    content: str
    created_at: str


@dataclass
class StoredImage:
    mime_type: str
    data: bytes


def extract_embedded_images(content: str) -> list[EmbeddedImage]:
    """Find every ``src="data:image/...;base64,..."`` in the HTML.

    Raises:
        ValueError: If a payload is not valid base64.
    """
    images = []
    for match in DATA_URI_PATTERN.finditer(content):
        mime_type, payload = match.group(1), match.group(2)
        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 image data ({mime_type}): {e}") from e
        images.append(EmbeddedImage(mime_type=mime_type, data=data, original_url=f"data:{mime_type};base64,{payload}"))
    return images


class BlogStore(SQLiteStore):
    """SQLite store for blogs and their images.

    Embedded data-URI images are moved into the ``images`` table and the HTML
    is rewritten to reference ``/api/images/{id}``.
    """

    ddl = ALL_BLOG_DDL

    def _store_images(self, conn: sqlite3.Connection, blog_id: int, content: str) -> str:
        processed = content
        for image in extract_embedded_images(content):
            cursor = conn.execute(
                "INSERT INTO images (blog_id, mime_type, data) VALUES (?, ?, ?)",
                [blog_id, image.mime_type, image.data],
            )
            url = IMAGE_URL_TEMPLATE.format(image_id=cursor.lastrowid)
            processed = processed.replace(image.original_url, url, 1)
        conn.execute("UPDATE blogs SET content = ? WHERE id = ?", [processed, blog_id])
        return processed

    def create(self, title: str, content: str) -> int:
        """Insert a blog and return its id."""
        conn = self._get_connection()
        with self._transaction(conn):
            cursor = conn.execute("INSERT INTO blogs (title, content) VALUES (?, ?)", [title, content])
            blog_id = int(cursor.lastrowid or 0)
            self._store_images(conn, blog_id, content)
        logger.info("Created blog %d", blog_id)
        return blog_id

    def update(self, blog_id: int, title: str, content: str) -> bool:
        """Replace a blog's title, content and images.

        Returns:
            False when the blog does not exist.
        """
        conn = self._get_connection()
        with self._transaction(conn):
            cursor = conn.execute("UPDATE blogs SET title = ?, content = '' WHERE id = ?", [title, blog_id])
            if cursor.rowcount == 0:
                return False
            conn.execute("DELETE FROM images WHERE blog_id = ?", [blog_id])
            self._store_images(conn, blog_id, content)
        logger.info("Updated blog %d", blog_id)
        return True

    def list_blogs(self) -> list[BlogSummary]:
        """All blogs, newest first."""
        conn = self._get_connection()
        rows = conn.execute("SELECT id, title, created_at FROM blogs ORDER BY created_at DESC, id DESC").fetchall()
        return [BlogSummary(id=int(r["id"]), title=r["title"], created_at=str(r["created_at"])) for r in rows]

    def get_blog(self, blog_id: int) -> Blog | None:
        conn = self._get_connection()
        row = conn.execute("SELECT id, title, content, created_at FROM blogs WHERE id = ?", [blog_id]).fetchone()
        if row is None:
            return None
        return Blog(id=int(row["id"]), title=row["title"], content=row["content"], created_at=str(row["created_at"]))

    def get_image(self, image_id: int) -> StoredImage | None:
        conn = self._get_connection()
        row = conn.execute("SELECT mime_type, data FROM images WHERE id = ?", [image_id]).fetchone()
        if row is None:
            return None
        return StoredImage(mime_type=row["mime_type"], data=bytes(row["data"]))

    def delete(self, blog_id: int) -> bool:
        """Delete a blog (its images cascade). False when it does not exist."""
        conn = self._get_connection()
        with self._transaction(conn):
            cursor = conn.execute("DELETE FROM blogs WHERE id = ?", [blog_id])
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Deleted blog %d", blog_id)
        return deleted
