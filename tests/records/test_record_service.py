from __future__ import annotations

import pytest

from conftest import make_record
from src.ops_tracker.ops_tracker.core.exceptions import NotFoundError, ValidationError


def test_create_assigns_id_when_missing(container, records_repo):
    data = make_record("ignored").to_dict()
    del data["id"]

    created = container.record_service.create_record(data)

    assert created.id
    assert records_repo.get_by_id(created.id) == created


def test_create_rejects_unknown_user_and_duplicate_id(container):
    with pytest.raises(ValidationError):
        container.record_service.create_record(make_record("r1", user_id="ghost").to_dict())

    container.record_service.create_record(make_record("r1").to_dict())
    with pytest.raises(ValidationError):
        container.record_service.create_record(make_record("r1").to_dict())


def test_update_is_last_write_wins(container, records_repo):
    records_repo.create(make_record("r1"))

    container.record_service.update_record({"id": "r1", "count": 3})
    container.record_service.update_record({"id": "r1", "count": 7})

    assert records_repo.get_by_id("r1").count == 7


def test_update_and_delete_unknown_record(container):
    with pytest.raises(NotFoundError, match="Record not found for updating"):
        container.record_service.update_record({"id": "nope"})
    with pytest.raises(NotFoundError):
        container.record_service.delete_record("nope")
    with pytest.raises(ValidationError):
        container.record_service.delete_record("")
