"""SQLite schema definitions for the watchlist backend.

Snapshots hold the full row collection as JSON; ``symbols`` keeps the latest
per-symbol status; ``history`` is an append-only action log. Blogs and their
extracted images live in the same database file.
"""

# ---------------------------------------------------------------------------
# Watchlist tables
# ---------------------------------------------------------------------------

WATCHLIST_SNAPSHOTS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS watchlist_snapshots (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    snapshot_name TEXT,
    snapshot_data JSON NOT NULL,
    metadata JSON,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    notes TEXT
)
"""

SYMBOLS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS symbols (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    symbol TEXT NOT NULL UNIQUE,
    symbol_data JSON NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

HISTORY_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    action TEXT NOT NULL,
    symbol TEXT,
    change_data JSON,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

ALL_WATCHLIST_DDL: list[str] = [
    WATCHLIST_SNAPSHOTS_TABLE_DDL,
    SYMBOLS_TABLE_DDL,
    HISTORY_TABLE_DDL,
]

# ---------------------------------------------------------------------------
# Blog tables
# ---------------------------------------------------------------------------

BLOGS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS blogs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

IMAGES_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS images (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    blog_id INTEGER,
    mime_type TEXT NOT NULL,
    data BLOB NOT NULL,
    FOREIGN KEY(blog_id) REFERENCES blogs(id) ON DELETE CASCADE
)
"""

ALL_BLOG_DDL: list[str] = [
    BLOGS_TABLE_DDL,
    IMAGES_TABLE_DDL,
]


__all__ = [
    "WATCHLIST_SNAPSHOTS_TABLE_DDL",
    "SYMBOLS_TABLE_DDL",
    "HISTORY_TABLE_DDL",
    "ALL_WATCHLIST_DDL",
    "BLOGS_TABLE_DDL",
    "IMAGES_TABLE_DDL",
    "ALL_BLOG_DDL",
]
