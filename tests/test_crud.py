"""
Tests for the store storage accessor.
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from stores_api.db.crud import store as store_crud
from stores_api.db.models.store import Store
from stores_api.db.schemas.store import StoreCreate, StoreUpdate, to_record


def _create(db, name="Acme", address="1 Main St", **extra):
    return store_crud.create_store(db, StoreCreate(name=name, address=address, **extra))


class TestCreateStore:

    def test_assigns_id_and_timestamps(self, db):
        store = _create(db, phone="555-0000")
        assert isinstance(store.id, int)
        assert store.phone == "555-0000"
        assert store.email is None
        assert store.created_at is not None
        assert store.created_at == store.updated_at

    def test_ids_are_not_reused(self, db):
        first = _create(db)
        assert store_crud.delete_store(db, first.id)
        second = _create(db, name="Beta")
        assert second.id > first.id

    def test_empty_name_is_rejected_by_the_table(self, db):
        db.add(Store(name="", address="1 Main St"))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()


class TestReadStores:

    def test_list_is_newest_first(self, db):
        ids = [_create(db, name=f"Store {i}").id for i in range(3)]
        assert [store.id for store in store_crud.get_stores(db)] == sorted(ids, reverse=True)

    def test_list_empty(self, db):
        assert store_crud.get_stores(db) == []

    def test_get_store(self, db):
        created = _create(db)
        assert store_crud.get_store(db, created.id).name == "Acme"

    def test_get_missing_store(self, db):
        assert store_crud.get_store(db, 9999) is None
        assert store_crud.get_store(db, None) is None

    def test_to_record(self, db):
        record = to_record(_create(db))
        assert record["name"] == "Acme"
        assert record["phone"] is None
        assert isinstance(record["created_at"], str)
        assert datetime.fromisoformat(record["created_at"]) == datetime.fromisoformat(record["updated_at"])


class TestUpdateStore:

    def test_merges_supplied_fields(self, db):
        store = _create(db, email="acme@example.com")
        updated = store_crud.update_store(db, store, StoreUpdate(phone="555-1234"))
        assert updated.phone == "555-1234"
        assert updated.name == "Acme"
        assert updated.address == "1 Main St"
        assert updated.email == "acme@example.com"

    def test_refreshes_updated_at(self, db):
        store = _create(db)
        created_at = store.created_at
        updated = store_crud.update_store(db, store, StoreUpdate(name="Acme 2"))
        assert updated.created_at == created_at
        assert updated.updated_at > created_at

    def test_updated_at_increases_when_clock_stands_still(self, db, monkeypatch):
        store = _create(db)
        frozen = store.updated_at
        monkeypatch.setattr(store_crud, "utcnow", lambda: frozen)

        updated = store_crud.update_store(db, store, StoreUpdate(name="Acme 2"))
        assert updated.updated_at == frozen + timedelta(microseconds=1)

    def test_can_clear_optional_field(self, db):
        store = _create(db, phone="555-0000")
        updated = store_crud.update_store(db, store, StoreUpdate(phone=None))
        assert updated.phone is None


class TestDeleteStore:

    def test_delete_existing(self, db):
        store = _create(db)
        assert store_crud.delete_store(db, store.id) is True
        assert store_crud.get_store(db, store.id) is None

    def test_delete_missing(self, db):
        assert store_crud.delete_store(db, 9999) is False
        assert store_crud.delete_store(db, None) is False
