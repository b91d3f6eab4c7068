# routes/store.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stores_api.core.errors import NotFound, StorageError
from stores_api.db.crud import store as store_crud
from stores_api.db.schemas.store import StoreCreate, StoreUpdate, to_record, validate_payload
from stores_api.dependencies import get_db, parse_store_id, read_payload, response_format
from stores_api.formats.negotiation import WireFormat, render

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/stores",
    tags=["stores"]
)


def _storage_failure(db: Session, message: str, exc: SQLAlchemyError) -> StorageError:
    db.rollback()
    logger.error(f"{message}: {exc}")
    return StorageError(message)


@router.get("")
def list_stores(
    fmt: WireFormat = Depends(response_format),
    db: Session = Depends(get_db)
):
    """Get all stores, newest first"""
    try:
        stores = store_crud.get_stores(db)
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Database error", e) from e
    return render([to_record(store) for store in stores], fmt)


@router.post("")
def create_store(
    payload: Dict[str, Any] = Depends(read_payload),
    fmt: WireFormat = Depends(response_format),
    db: Session = Depends(get_db)
):
    """Create a new store"""
    store = validate_payload(StoreCreate, payload)
    try:
        db_store = store_crud.create_store(db, store)
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Failed to create store", e) from e
    logger.info(f"Created store {db_store.id}")
    return render(to_record(db_store), fmt, status.HTTP_201_CREATED)


@router.get("/{store_id}")
def get_store(
    store_id: str,
    fmt: WireFormat = Depends(response_format),
    db: Session = Depends(get_db)
):
    """Get a specific store"""
    try:
        db_store = store_crud.get_store(db, parse_store_id(store_id))
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Database error", e) from e
    if not db_store:
        raise NotFound()
    return render(to_record(db_store), fmt)


@router.put("/{store_id}")
def update_store(
    store_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    fmt: WireFormat = Depends(response_format),
    db: Session = Depends(get_db)
):
    """Update a store; fields left out of the payload keep their values"""
    try:
        db_store = store_crud.get_store(db, parse_store_id(store_id))
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Database error", e) from e
    # Existence is reported before any field errors
    if not db_store:
        raise NotFound()

    changes = validate_payload(StoreUpdate, payload)
    try:
        db_store = store_crud.update_store(db, db_store, changes)
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Update failed", e) from e
    logger.info(f"Updated store {db_store.id}")
    return render(to_record(db_store), fmt)


@router.delete("/{store_id}")
def delete_store(
    store_id: str,
    fmt: WireFormat = Depends(response_format),
    db: Session = Depends(get_db)
):
    """Delete a store"""
    parsed_id = parse_store_id(store_id)
    try:
        deleted = store_crud.delete_store(db, parsed_id)
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Delete failed", e) from e
    if not deleted:
        raise NotFound()
    logger.info(f"Deleted store {parsed_id}")
    return render({"message": "Store deleted"}, fmt)
