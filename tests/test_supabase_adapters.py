"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

import pytest

from exchange_admin.adapters.supabase_document_repository import (
    SupabaseDocumentRepository,
)
from exchange_admin.adapters.supabase_kyc_repository import SupabaseKycRepository


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_columns: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str) -> "FakeTable":
        self._action = "select"
        self.last_columns = columns
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}.neq", value))
        return self

    @property
    def not_(self) -> "FakeTable":
        self._negate = True
        return self

    def is_(self, column: str, value: str) -> "FakeTable":
        operator = "not.is" if getattr(self, "_negate", False) else "is"
        self._negate = False
        self.last_filters.append((f"{column}.{operator}", value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_document_repository_reads_kyc_document() -> None:
    client = FakeSupabaseClient()
    users = client.table("users")
    users.queue("select", [{"username": "alice", "kyc_document": "JVBERi0="}])
    users.queue("select", [{"username": "bob", "kyc_document": None}])

    repository = SupabaseDocumentRepository(client)
    document = repository.get_kyc_document(1)
    missing = repository.get_kyc_document(2)
    unknown = repository.get_kyc_document(3)

    assert document is not None
    assert document.owner_label == "alice"
    assert document.payload == "JVBERi0="
    assert missing is None
    assert unknown is None
    assert users.last_filters[0] == ("id", 1)


def test_document_repository_reads_payment_proof() -> None:
    client = FakeSupabaseClient()
    transactions = client.table("transactions")
    transactions.queue("select", [{"id": 11, "proof_of_payment": "iVBORw=="}])

    repository = SupabaseDocumentRepository(client)
    proof = repository.get_payment_proof(11)

    assert proof is not None
    assert proof.owner_label == "11"
    assert repository.get_payment_proof(12) is None


def test_kyc_repository_user_and_listing() -> None:
    client = FakeSupabaseClient()
    users = client.table("users")
    users.queue("select", [{"id": 1, "username": "alice", "kyc_status": "pending"}])
    users.queue("select", [{"id": 1}])
    users.queue("select", [{"id": 2, "username": "bob", "kyc_status": "pending"}])
    users.queue("select", [])
    users.queue(
        "select",
        [
            {"id": 1, "username": "alice", "kyc_status": "pending"},
            {"id": 3, "username": "carol", "kyc_status": "pending"},
        ],
    )

    repository = SupabaseKycRepository(client)
    alice = repository.get_user(1)
    bob = repository.get_user(2)
    pending = repository.list_users_with_document("pending")

    assert alice is not None
    assert alice.has_document is True
    assert bob is not None
    assert bob.has_document is False
    assert [record.id for record in pending] == [1, 3]
    assert all(record.has_document for record in pending)
    assert ("kyc_status", "pending") in users.last_filters


def test_kyc_repository_never_selects_document_blob() -> None:
    client = FakeSupabaseClient()
    users = client.table("users")
    repository = SupabaseKycRepository(client)

    repository.list_users_with_document("pending")

    assert users.last_columns is not None
    assert "kyc_document" not in users.last_columns
    assert ("kyc_document.not.is", "null") in users.last_filters
    assert ("kyc_document.neq", "") in users.last_filters

    users.last_filters.clear()
    users.queue("select", [{"id": 1, "username": "alice", "kyc_status": "pending"}])
    repository.get_user(1)

    assert users.last_columns == "id"
    assert ("kyc_document.not.is", "null") in users.last_filters


def test_kyc_repository_writes() -> None:
    client = FakeSupabaseClient()
    users = client.table("users")
    users.queue("update", [{"id": 1}])
    users.queue("update", [{"id": 1}])

    repository = SupabaseKycRepository(client)
    repository.save_kyc_document(1, "cGF5bG9hZA==")
    assert users.last_payload == {"kyc_document": "cGF5bG9hZA==", "kyc_status": "pending"}

    repository.set_kyc_status(1, "approved")
    assert users.last_payload == {"kyc_status": "approved"}


def test_kyc_repository_write_failure_raises() -> None:
    repository = SupabaseKycRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.set_kyc_status(1, "approved")
