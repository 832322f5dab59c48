import logging
import sqlite3
from pathlib import Path

from .errors import ConflictError

logger = logging.getLogger(__name__)

COLUMNS = ("user_id", "username", "email", "password_hash", "created_at")


class UserStore:
    """SQLite-backed credential store.

    A connection is opened per call. Email and username uniqueness is enforced
    by the table constraints, not by a lookup before insert.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)

    def _connect(self):
        conn = sqlite3.connect(self.db_path, timeout=10)
        conn.row_factory = sqlite3.Row
        return conn

    def init_schema(self):
        conn = self._connect()
        try:
            conn.execute("""
            CREATE TABLE IF NOT EXISTS users (
                user_id TEXT PRIMARY KEY,
                username TEXT NOT NULL UNIQUE,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """)
            conn.commit()
        finally:
            conn.close()
        logger.info("auth db ready at %s", self.db_path)

    def insert_user(self, user: dict):
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO users(user_id, username, email, password_hash, created_at) VALUES(?,?,?,?,?)",
                tuple(user[c] for c in COLUMNS),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            # sqlite reports "UNIQUE constraint failed: users.email"
            field = "email" if "users.email" in str(e) else "username"
            raise ConflictError(f"A user with this {field} already exists") from e
        finally:
            conn.close()

    def _fetch_one(self, where: str, value: str) -> dict | None:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {', '.join(COLUMNS)} FROM users WHERE {where}=?", (value,)
            ).fetchone()
        finally:
            conn.close()
        return dict(row) if row else None

    def get_by_email(self, email: str) -> dict | None:
        return self._fetch_one("email", email)

    def get_by_id(self, user_id: str) -> dict | None:
        return self._fetch_one("user_id", user_id)
