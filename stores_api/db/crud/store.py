from datetime import timedelta
from sqlalchemy.orm import Session
from typing import List, Optional
from stores_api.db.models.store import Store, utcnow
from stores_api.db.schemas.store import StoreCreate, StoreUpdate

def get_stores(db: Session) -> List[Store]:
    """Get every store, newest id first"""
    return db.query(Store).order_by(Store.id.desc()).all()

def get_store(db: Session, store_id: Optional[int]) -> Optional[Store]:
    if store_id is None:
        return None
    return db.query(Store).filter(Store.id == store_id).first()

def create_store(db: Session, store: StoreCreate) -> Store:
    now = utcnow()
    db_store = Store(**store.model_dump(), created_at=now, updated_at=now)
    db.add(db_store)
    db.commit()
    db.refresh(db_store)
    return db_store

def update_store(db: Session, db_store: Store, store_update: StoreUpdate) -> Store:
    """Merge the supplied fields into an existing store and refresh updated_at"""
    update_data = store_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_store, field, value)

    now = utcnow()
    if db_store.updated_at is not None and now <= db_store.updated_at:
        now = db_store.updated_at + timedelta(microseconds=1)
    db_store.updated_at = now

    db.commit()
    db.refresh(db_store)
    return db_store

def delete_store(db: Session, store_id: Optional[int]) -> bool:
    db_store = get_store(db, store_id)
    if db_store:
        db.delete(db_store)
        db.commit()
        return True
    return False
