import os
import sys
from pathlib import Path

# Environment must be in place before config.py is imported
os.environ["ENVIRONMENT"] = "development"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_SERVICE_KEY"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["AI_PROVIDER"] = "template"
os.environ["ASSETS_BUCKET"] = "assets"

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi.testclient import TestClient

from supabase_config import supabase_config
from supabase_db import db


class FakeResponse:
    def __init__(self, data):
        self.data = data
        self.count = len(data)


class FakeQuery:
    """Just enough of the postgrest query builder for the table layer"""

    def __init__(self, tables, name):
        self.rows = tables.setdefault(name, [])
        self.op = "select"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.max_rows = None

    def select(self, *columns, **kwargs):
        self.op = "select"
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.max_rows = count
        return self

    def _matches(self):
        return [r for r in self.rows if all(r.get(c) == v for c, v in self.filters)]

    def execute(self):
        if self.op == "insert":
            records = self.payload if isinstance(self.payload, list) else [self.payload]
            for record in records:
                self.rows.append(dict(record))
            return FakeResponse([dict(r) for r in records])

        matched = self._matches()

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
        elif self.op == "delete":
            for row in matched:
                self.rows.remove(row)
        else:
            if self.order_by:
                column, desc = self.order_by
                matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
            if self.max_rows is not None:
                matched = matched[:self.max_rows]

        return FakeResponse([dict(r) for r in matched])


class FakeBucket:
    def __init__(self, objects, name):
        self.objects = objects
        self.name = name

    def upload(self, path, file, file_options=None):
        self.objects[f"{self.name}/{path}"] = {"data": file, "options": file_options}
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path):
        return f"https://test.supabase.co/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths):
        for path in paths:
            self.objects.pop(f"{self.name}/{path}", None)
        return [{"name": p} for p in paths]


class FakeStorage:
    def __init__(self):
        self.objects = {}

    def from_(self, bucket):
        return FakeBucket(self.objects, bucket)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.storage = FakeStorage()
        self.auth = None

    def table(self, name):
        return FakeQuery(self.tables, name)


@pytest.fixture
def fake_supabase(monkeypatch):
    fake = FakeSupabase()
    monkeypatch.setattr(supabase_config, "client", fake)
    return fake


@pytest.fixture
def api(fake_supabase):
    from app import app

    with TestClient(app, headers={"X-User-ID": "user-1234567890"}) as client:
        yield client


@pytest.fixture
def brand(fake_supabase):
    return db.create_client("Acme Coffee", ["#000000", "#FFFFFF"])


@pytest.fixture
def other_brand(fake_supabase):
    return db.create_client("Other Brand", ["#123456"])
