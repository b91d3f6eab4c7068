# models/store.py
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from stores_api.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns hand back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Store(Base):
    __tablename__ = "stores"
    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_stores_name_not_empty"),
        CheckConstraint("length(trim(address)) > 0", name="ck_stores_address_not_empty"),
        # ids are never reused after a delete
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Store(id={self.id}, name='{self.name}')>"
