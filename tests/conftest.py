"""
Shared fixtures: an in-memory stand-in for the Supabase query builder and a
recording SMS gateway, wired into the app through dependency overrides.
"""
import copy
import re
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.database.supabase_client import get_supabase
from app.main import app, limiter
from app.messaging.sms_client import get_sms_gateway

# embedded table -> foreign key column on the notifications table
FOREIGN_KEYS = {"contacts_table": "contact_id", "event_table": "event_id"}

_EMBED = re.compile(r"(\w+):(\w+)\(([^)]*)\)")


def _like(pattern: str, value: Any) -> bool:
    if value is None:
        return False
    regex = ".*".join(re.escape(part) for part in pattern.split("%"))
    return re.fullmatch(regex, str(value), re.IGNORECASE) is not None


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.columns = "*"
        self.payload: Any = None
        self.filters: List = []
        self.order_by: Optional[tuple] = None
        self.limit_n: Optional[int] = None
        self.single = False

    # -- actions --
    def select(self, columns: str = "*"):
        self.columns = columns
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    # -- filters --
    def eq(self, column, value):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column, values):
        wanted = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def ilike(self, column, pattern):
        self.filters.append(lambda row: _like(pattern, row.get(column)))
        return self

    def or_(self, expression: str):
        clauses = []
        for part in expression.split(","):
            column, op, value = part.split(".", 2)
            assert op == "ilike", f"unsupported or_ operator {op}"
            clauses.append((column, value))
        self.filters.append(lambda row: any(_like(v, row.get(c)) for c, v in clauses))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def maybe_single(self):
        self.single = True
        return self

    # -- execution --
    def _matches(self, row) -> bool:
        return all(f(row) for f in self.filters)

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        embeds = _EMBED.findall(self.columns)
        plain = [c.strip() for c in _EMBED.sub("", self.columns).split(",") if c.strip()]
        out = dict(row) if "*" in plain else {c: row.get(c) for c in plain}
        for alias, table, cols in embeds:
            fk = FOREIGN_KEYS[table]
            target = next((r for r in self.db.tables[table] if str(r["id"]) == str(row.get(fk))), None)
            fields = [c.strip() for c in cols.split(",")]
            out[alias] = {c: target.get(c) for c in fields} if target else None
        return out

    def execute(self):
        self.db.calls.append((self.table_name, self.action))
        failure = self.db.failures.get((self.table_name, self.action))
        if failure is not None:
            raise failure

        rows = self.db.tables[self.table_name]
        if self.action == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for item in items:
                self.db.next_id += 1
                record = {"id": self.db.next_id, **copy.deepcopy(item)}
                rows.append(record)
                created.append(dict(record))
            return FakeResponse(created)

        if self.action == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self.payload))
                    updated.append(dict(row))
            return FakeResponse(updated)

        if self.action == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return FakeResponse(removed)

        selected = [row for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            selected = sorted(selected, key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
        if self.limit_n is not None:
            selected = selected[: self.limit_n]
        data = [self._project(row) for row in selected]
        if self.single:
            return FakeResponse(data[0]) if data else None
        return FakeResponse(data)


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            "contacts_table": [],
            "event_table": [],
            "notifications_table": [],
        }
        self.next_id = 0
        self.calls: List[tuple] = []
        self.failures: Dict[tuple, Exception] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    # -- seeding helpers --
    def add(self, table: str, **fields) -> Dict[str, Any]:
        self.next_id += 1
        row = {"id": self.next_id, **fields}
        self.tables[table].append(row)
        return row

    def fail(self, table: str, action: str, message: str = "upstream exploded"):
        self.failures[(table, action)] = APIError({"message": message, "code": "XX000", "hint": None, "details": None})

    def count(self, table: str, action: str) -> int:
        return sum(1 for call in self.calls if call == (table, action))


class FakeSmsGateway:
    def __init__(self):
        self.sent: List[tuple] = []
        self.invalid_numbers = set()

    def send_sms(self, to_phone: str, body: str) -> str:
        if to_phone in self.invalid_numbers:
            raise Exception(f"The 'To' number {to_phone} is not a valid phone number.")
        self.sent.append((to_phone, body))
        return f"SM{len(self.sent):032d}"


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def sms():
    return FakeSmsGateway()


@pytest.fixture
def client(db, sms):
    limiter.reset()
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_sms_gateway] = lambda: sms
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
