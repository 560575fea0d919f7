"""Shared test fixtures: an in-memory stand-in for the Supabase client."""
import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

# Settings are read at import time; keep tests off any real project
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

from fastapi.testclient import TestClient  # noqa: E402

from app.database.supabase_client import get_supabase  # noqa: E402
from app.modules.auth.service import clear_auth_cache  # noqa: E402


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]], count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    """Just enough of the PostgREST request builder for the services under test."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.op = "select"
        self.columns = "*"
        self.count = None
        self.payload: Any = None
        self.on_conflict: Optional[str] = None
        self.filters = []
        self._order = None
        self._limit = None
        self._offset = 0

    def select(self, columns: str = "*", count: Optional[str] = None):
        self.columns = columns
        self.count = count
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict: Optional[str] = None):
        self.op = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        # PostgREST compares on the column type; path params arrive as strings
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def ilike(self, column, pattern):
        needle = pattern.strip("%").lower()
        self.filters.append(lambda row: needle in (row.get(column) or "").lower())
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def offset(self, n):
        self._offset = n
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def _project(self, row):
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        keys = [c.strip() for c in self.columns.split(",")]
        return {k: copy.deepcopy(row.get(k)) for k in keys}

    def execute(self):
        self.db.executed.append((self.table_name, self.op))
        if self.table_name in self.db.failures:
            raise self.db.failures[self.table_name]

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.op in ("insert", "upsert"):
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            written = []
            for item in items:
                item = dict(item)
                existing = None
                if self.op == "upsert" and self.on_conflict:
                    keys = self.on_conflict.split(",")
                    existing = next(
                        (r for r in rows if all(r.get(k) == item.get(k) for k in keys)), None
                    )
                if existing is not None:
                    existing.update(item)
                    written.append(copy.deepcopy(existing))
                    continue
                item.setdefault("id", self.db.next_id())
                rows.append(item)
                written.append(copy.deepcopy(item))
            return FakeResponse(written)

        matched = [r for r in rows if self._matches(r)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([copy.deepcopy(r) for r in matched])

        if self.op == "delete":
            self.db.tables[self.table_name] = [r for r in rows if not self._matches(r)]
            return FakeResponse([copy.deepcopy(r) for r in matched])

        total = len(matched)
        if self._order:
            column, desc = self._order
            matched = sorted(
                matched,
                key=lambda r: (r.get(column) is None, r.get(column)),
                reverse=desc
            )
        end = None if self._limit is None else self._offset + self._limit
        matched = matched[self._offset:end]
        return FakeResponse(
            [self._project(r) for r in matched],
            count=total if self.count else None
        )


class FakeAuth:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}
        self.error: Optional[Exception] = None
        self.calls = 0

    def add_user(self, token: str, user_id: str, **metadata):
        self.users[token] = SimpleNamespace(
            id=user_id,
            email=f"{user_id}@example.com",
            user_metadata=metadata or {},
            app_metadata={},
            created_at=None,
            updated_at=None,
        )

    def get_user(self, jwt: Optional[str] = None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return SimpleNamespace(user=self.users.get(jwt))


class FakeSupabase:
    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables = tables or {}
        self.failures: Dict[str, Exception] = {}
        self.executed: List[tuple] = []
        self.auth = FakeAuth()
        self._id = 1000

    def next_id(self) -> int:
        self._id += 1
        return self._id

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, error: Optional[Exception] = None):
        self.failures[table] = error or ConnectionError(f"connection to {table} lost")

    def queried_tables(self) -> List[str]:
        return [name for name, _ in self.executed]


def _flags(view=False, add=False, edit=False, delete=False, print_=False):
    return {
        "can_view": view,
        "can_add": add,
        "can_edit": edit,
        "can_delete": delete,
        "can_print": print_,
    }


@pytest.fixture(autouse=True)
def reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Store with three pages and three roles.

    editor -> projects: view, add, print; documents: view
    viewer -> projects: edit only; dashboard: view
    admin  -> every page: everything
    """
    db = FakeSupabase({
        "pages": [
            {"id": 7, "code": "projects", "name": "Projects", "description": "Project tracking"},
            {"id": 8, "code": "dashboard", "name": "Dashboard", "description": None},
            {"id": 9, "code": "documents", "name": "Documents", "description": None},
        ],
        "roles": [
            {"id": "editor", "name": "editor"},
            {"id": "viewer", "name": "viewer"},
            {"id": "admin", "name": "admin"},
        ],
        "user_roles": [
            {"user_id": "user-editor", "role_id": "editor"},
            {"user_id": "user-both", "role_id": "editor"},
            {"user_id": "user-both", "role_id": "viewer"},
            {"user_id": "user-viewer", "role_id": "viewer"},
            {"user_id": "user-admin", "role_id": "admin"},
        ],
        "role_permissions": [
            {"role_id": "editor", "page_id": 7, **_flags(view=True, add=True, print_=True)},
            {"role_id": "viewer", "page_id": 7, **_flags(edit=True)},
            {"role_id": "viewer", "page_id": 8, **_flags(view=True)},
            {"role_id": "admin", "page_id": 7, **_flags(True, True, True, True, True)},
            {"role_id": "admin", "page_id": 8, **_flags(True, True, True, True, True)},
            {"role_id": "editor", "page_id": 9, **_flags(view=True)},
            {"role_id": "admin", "page_id": 9, **_flags(True, True, True, True, True)},
        ],
        "profiles": [
            {"id": "user-admin", "email": "admin@example.com", "full_name": "Ada Admin", "role": "admin"},
            {"id": "user-editor", "email": "editor@example.com", "full_name": "Eddie Editor", "role": "editor"},
            {"id": "user-viewer", "email": None, "username": "vera", "role": "user"},
        ],
        "projects": [
            {"id": 1, "name": "Website redesign", "description": None, "status": "open",
             "updated_at": "2026-01-03T00:00:00+00:00"},
            {"id": 2, "name": "Mobile app", "description": "iOS first", "status": "in_progress",
             "updated_at": "2026-01-05T00:00:00+00:00"},
            {"id": 3, "name": "Website copy", "description": None, "status": "done",
             "updated_at": "2026-01-01T00:00:00+00:00"},
        ],
        "documents": [],
    })
    db.auth.add_user("token-editor", "user-editor")
    db.auth.add_user("token-both", "user-both")
    db.auth.add_user("token-viewer", "user-viewer")
    db.auth.add_user("token-admin", "user-admin")
    db.auth.add_user("token-norole", "user-norole")
    db.auth.add_user("token-meta-admin", "user-meta-admin", is_admin=True)
    return db


@pytest.fixture
def client(fake_supabase: FakeSupabase):
    from app.main import app

    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    yield TestClient(app)
    app.dependency_overrides.clear()
