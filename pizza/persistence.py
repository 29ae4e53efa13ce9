"""SQLite order store shared by the host and guests on one machine."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from pizza.config import resolve_db_path
from pizza.count import Count
from pizza.models import UpdateEvent
from pizza.orders import OrderBook
from pizza.toppings import key

HOST_PARTICIPANT_ID = "host"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _connect() -> sqlite3.Connection:
    db_file = Path(resolve_db_path())
    db_file.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_file)


def bootstrap_schema() -> None:
    """Create persistence schema if it does not already exist."""
    with _connect() as conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS participant_counts (
                participant_id TEXT NOT NULL,
                topping_key TEXT NOT NULL,
                count INTEGER NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (participant_id, topping_key)
            );

            CREATE TABLE IF NOT EXISTS order_updates (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                participant_id TEXT NOT NULL,
                topping_key TEXT NOT NULL,
                count INTEGER NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_participant_counts_participant
                ON participant_counts(participant_id);
            """
        )


def save_update(event: UpdateEvent) -> int:
    """Store one absolute count (last write wins) and return the new version."""
    if event.count < 0:
        raise ValueError("count must be non-negative")
    participant_id = event.participant_id.strip()
    if not participant_id:
        raise ValueError("participant_id is required")

    topping_key = key(event.topping)
    now = _utc_now_iso()
    with _connect() as conn:
        with conn:
            conn.execute(
                """
                INSERT INTO participant_counts (participant_id, topping_key, count, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(participant_id, topping_key)
                DO UPDATE SET count = excluded.count, updated_at = excluded.updated_at
                """,
                (participant_id, topping_key, event.count, now),
            )
            cur = conn.execute(
                "INSERT INTO order_updates (created_at, participant_id, topping_key, count) VALUES (?, ?, ?, ?)",
                (now, participant_id, topping_key, event.count),
            )
            return int(cur.lastrowid)


def latest_version() -> int:
    with _connect() as conn:
        row = conn.execute("SELECT COALESCE(MAX(id), 0) FROM order_updates").fetchone()
    return int(row[0])


def load_participant_count(participant_id: str) -> Count:
    with _connect() as conn:
        rows = conn.execute(
            "SELECT topping_key, count FROM participant_counts WHERE participant_id = ?",
            (participant_id,),
        ).fetchall()
    return Count.from_mapping({topping_key: count for topping_key, count in rows})


def load_order_book() -> OrderBook:
    """Rebuild the whole book; the host's rows are stored under HOST_PARTICIPANT_ID."""
    raw: dict[str, dict[str, int]] = {}
    with _connect() as conn:
        rows = conn.execute(
            "SELECT participant_id, topping_key, count FROM participant_counts ORDER BY participant_id, topping_key"
        ).fetchall()
        version_row = conn.execute("SELECT COALESCE(MAX(id), 0) FROM order_updates").fetchone()

    for participant_id, topping_key, count in rows:
        raw.setdefault(participant_id, {})[topping_key] = count

    host = Count.from_mapping(raw.pop(HOST_PARTICIPANT_ID, {}))
    guests = {participant_id: Count.from_mapping(counts) for participant_id, counts in raw.items()}
    return OrderBook(host=host, guests=guests, version=int(version_row[0]))


def clear_orders() -> None:
    with _connect() as conn:
        with conn:
            conn.execute("DELETE FROM participant_counts")
            conn.execute("DELETE FROM order_updates")
