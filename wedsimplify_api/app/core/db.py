"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running several statements atomically
(``transaction``) and applying migrations on application start
(``init_db``).  SQLite is used as a lightweight embedded database;
to switch to another DBMS you would replace the connection logic and
adapt the SQL dialect accordingly.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.  Identifiers are UUID4 strings
and timestamps are UTC ISO‑8601 strings, both generated in Python so
that ordering by ``created_at`` has microsecond resolution.
"""

import json
import os
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import date, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from .config import settings


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path (or the special
    ``:memory:`` name), use it directly.  Otherwise resolve it relative
    to the project root.
    """
    db_url = settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` objects so columns can be
    accessed by name.  Foreign keys are switched on for every
    connection; without the pragma SQLite ignores ``ON DELETE
    CASCADE`` and deleting a user would orphan its profiles.
    """
    conn = sqlite3.connect(get_database_path(), timeout=10)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


@contextmanager
def transaction() -> Iterator[sqlite3.Cursor]:
    """Run the enclosed statements as one write transaction.

    ``BEGIN IMMEDIATE`` takes the database write lock up front, so two
    concurrent profile setups (or availability upserts) are serialised
    instead of both passing a read check.  Any exception rolls the
    transaction back and is re‑raised.
    """
    conn = get_connection()
    conn.isolation_level = None
    cursor = conn.cursor()
    try:
        cursor.execute("BEGIN IMMEDIATE")
        yield cursor
        cursor.execute("COMMIT")
    except BaseException:
        if conn.in_transaction:
            cursor.execute("ROLLBACK")
        raise
    finally:
        conn.close()


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid.uuid4())


def utcnow() -> str:
    """Current UTC instant as an ISO‑8601 string with microseconds."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def to_db(value: Any) -> Any:
    """Convert a Python value to what is stored in SQLite.

    Booleans become 0/1, dates and datetimes ISO strings, enums their
    value and lists JSON text.  Everything else is passed through.
    """
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return json.dumps(value)
    return value


def insert_row(cursor: sqlite3.Cursor, table: str, values: Dict[str, Any]) -> None:
    """INSERT ``values`` (column -> value) into ``table``.

    Column names come from schema field names, never from user input.
    """
    columns = ", ".join(values)
    placeholders = ", ".join("?" for _ in values)
    cursor.execute(
        f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
        tuple(to_db(v) for v in values.values()),
    )


def assignments(values: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """Build the ``SET`` clause and parameters of an UPDATE statement."""
    clause = ", ".join(f"{column} = ?" for column in values)
    return clause, [to_db(v) for v in values.values()]


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: users and role profiles
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT UNIQUE,
            first_name TEXT,
            last_name TEXT,
            profile_image_url TEXT,
            role TEXT NOT NULL DEFAULT 'couple'
                CHECK (role IN ('couple', 'individual', 'vendor')),
            auth_provider TEXT,
            provider_id TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS couples (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL UNIQUE REFERENCES users(id) ON DELETE CASCADE,
            couple_name TEXT NOT NULL,
            contact_email TEXT,
            partner_name TEXT,
            wedding_date TEXT,
            budget REAL,
            spent_amount REAL NOT NULL DEFAULT 0,
            venue TEXT,
            guest_count INTEGER,
            style TEXT,
            location TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS individuals (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL UNIQUE REFERENCES users(id) ON DELETE CASCADE,
            full_name TEXT NOT NULL,
            contact_email TEXT,
            phone TEXT,
            location TEXT,
            event_type TEXT,
            event_date TEXT,
            budget REAL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS vendors (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL UNIQUE REFERENCES users(id) ON DELETE CASCADE,
            business_name TEXT NOT NULL,
            category TEXT NOT NULL,
            description TEXT,
            location TEXT,
            country TEXT,
            state TEXT,
            city TEXT,
            phone TEXT,
            website TEXT,
            instagram TEXT,
            facebook TEXT,
            tiktok TEXT,
            pinterest TEXT,
            rating REAL NOT NULL DEFAULT 0,
            review_count INTEGER NOT NULL DEFAULT 0,
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: vendor catalogue and the inquiry workflow
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS vendor_packages (
            id TEXT PRIMARY KEY,
            vendor_id TEXT NOT NULL REFERENCES vendors(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            description TEXT,
            price REAL NOT NULL,
            duration TEXT,
            features TEXT,
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS portfolio_items (
            id TEXT PRIMARY KEY,
            vendor_id TEXT NOT NULL REFERENCES vendors(id) ON DELETE CASCADE,
            title TEXT,
            description TEXT,
            image_url TEXT NOT NULL,
            order_index INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL
        );

        -- Exactly one of couple_id / individual_id identifies the consumer.
        CREATE TABLE IF NOT EXISTS inquiries (
            id TEXT PRIMARY KEY,
            couple_id TEXT REFERENCES couples(id) ON DELETE CASCADE,
            individual_id TEXT REFERENCES individuals(id) ON DELETE CASCADE,
            vendor_id TEXT NOT NULL REFERENCES vendors(id) ON DELETE CASCADE,
            message TEXT NOT NULL,
            budget REAL,
            event_date TEXT,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'responded', 'accepted', 'declined')),
            vendor_response TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            CHECK ((couple_id IS NULL) <> (individual_id IS NULL))
        );
        """,
    ),
    # Migration 3: planning tools, calendar and per-user records
    (
        3,
        """
        CREATE TABLE IF NOT EXISTS budget_items (
            id TEXT PRIMARY KEY,
            couple_id TEXT REFERENCES couples(id) ON DELETE CASCADE,
            individual_id TEXT REFERENCES individuals(id) ON DELETE CASCADE,
            category TEXT NOT NULL,
            description TEXT NOT NULL,
            estimated_cost REAL,
            actual_cost REAL,
            is_paid INTEGER NOT NULL DEFAULT 0,
            notes TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            CHECK ((couple_id IS NULL) <> (individual_id IS NULL))
        );

        CREATE TABLE IF NOT EXISTS timeline_items (
            id TEXT PRIMARY KEY,
            couple_id TEXT REFERENCES couples(id) ON DELETE CASCADE,
            individual_id TEXT REFERENCES individuals(id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            description TEXT,
            due_date TEXT,
            is_completed INTEGER NOT NULL DEFAULT 0,
            category TEXT,
            priority TEXT NOT NULL DEFAULT 'medium'
                CHECK (priority IN ('low', 'medium', 'high')),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            CHECK ((couple_id IS NULL) <> (individual_id IS NULL))
        );

        CREATE TABLE IF NOT EXISTS vendor_availability (
            id TEXT PRIMARY KEY,
            vendor_id TEXT NOT NULL REFERENCES vendors(id) ON DELETE CASCADE,
            date TEXT NOT NULL,
            is_available INTEGER NOT NULL DEFAULT 1,
            event_type TEXT,
            event_title TEXT,
            notes TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            UNIQUE (vendor_id, date)
        );

        CREATE TABLE IF NOT EXISTS saved_vendors (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            vendor_id TEXT NOT NULL REFERENCES vendors(id) ON DELETE CASCADE,
            created_at TEXT NOT NULL,
            UNIQUE (user_id, vendor_id)
        );

        CREATE TABLE IF NOT EXISTS notifications (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            type TEXT NOT NULL,
            title TEXT NOT NULL,
            message TEXT,
            related_id TEXT,
            is_read INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS user_settings (
            user_id TEXT PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
            email_notifications INTEGER NOT NULL DEFAULT 1,
            inquiry_alerts INTEGER NOT NULL DEFAULT 1,
            marketing_emails INTEGER NOT NULL DEFAULT 0,
            sms_notifications INTEGER NOT NULL DEFAULT 0,
            timezone TEXT NOT NULL DEFAULT 'UTC',
            updated_at TEXT NOT NULL
        );
        """,
    ),
    # Migration 4: object ACLs and lookup indices
    (
        4,
        """
        CREATE TABLE IF NOT EXISTS object_acls (
            object_path TEXT PRIMARY KEY,
            owner_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            visibility TEXT NOT NULL DEFAULT 'private'
                CHECK (visibility IN ('public', 'private')),
            created_at TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_vendors_category ON vendors(category);
        CREATE INDEX IF NOT EXISTS idx_vendors_rating ON vendors(rating);
        CREATE INDEX IF NOT EXISTS idx_vendor_packages_vendor_id ON vendor_packages(vendor_id);
        CREATE INDEX IF NOT EXISTS idx_portfolio_items_vendor_id ON portfolio_items(vendor_id);
        CREATE INDEX IF NOT EXISTS idx_inquiries_vendor_id ON inquiries(vendor_id);
        CREATE INDEX IF NOT EXISTS idx_inquiries_couple_id ON inquiries(couple_id);
        CREATE INDEX IF NOT EXISTS idx_inquiries_individual_id ON inquiries(individual_id);
        CREATE INDEX IF NOT EXISTS idx_budget_items_couple_id ON budget_items(couple_id);
        CREATE INDEX IF NOT EXISTS idx_budget_items_individual_id ON budget_items(individual_id);
        CREATE INDEX IF NOT EXISTS idx_timeline_items_couple_id ON timeline_items(couple_id);
        CREATE INDEX IF NOT EXISTS idx_timeline_items_individual_id ON timeline_items(individual_id);
        CREATE INDEX IF NOT EXISTS idx_notifications_user_id ON notifications(user_id);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number; never edit an applied one.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
