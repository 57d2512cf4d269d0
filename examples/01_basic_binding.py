"""
Example 01: Basic Binding

This example demonstrates binding SQLite rows to a dataclass and a Pydantic model.
"""

from row_bind import RowLoader, QuerySource
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pydantic import BaseModel
import sqlite3


class Status(Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


@dataclass
class User:
    """User record using dataclass"""
    id: int = 0
    name: str | None = None
    active: bool = False
    status: Status | None = None
    created: datetime | None = None


class UserSummary(BaseModel):
    """User record using Pydantic"""
    id: int
    name: str


def main():
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            active INTEGER DEFAULT 1,
            status TEXT,
            created TEXT
        )
    """)
    conn.execute("INSERT INTO users (name, status, created) VALUES ('Alice', 'ACTIVE', '2024-03-01 10:00:00')")
    conn.execute("INSERT INTO users (name, active, status) VALUES ('Bob', 0, 'BLOCKED')")
    conn.commit()

    loader = RowLoader()

    print("=== Basic Binding ===\n")

    print("1. First row:")
    user = loader.first(User, QuerySource(conn, "SELECT * FROM users WHERE id = ?", (1,)))
    print(f"   Type: {type(user).__name__}")
    print(f"   Data: {user}\n")

    print("2. Lazy iteration:")
    for u in loader.each(User, QuerySource(conn, "SELECT * FROM users ORDER BY id")):
        print(f"   - {u.name}: active={u.active} status={u.status}")
    print()

    print("3. Pydantic model:")
    summaries = loader.to_list(UserSummary, QuerySource(conn, "SELECT id, name FROM users"))
    print(f"   Count: {len(summaries)} users")
    for s in summaries:
        print(f"   - {s.id}: {s.name}")

    conn.close()


if __name__ == "__main__":
    main()
