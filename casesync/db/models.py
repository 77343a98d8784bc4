"""ORM model for the key/value table backing the case store."""

from __future__ import annotations

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class StoreEntry(Base):  # type: ignore[valid-type]
    __tablename__ = "case_store_entry"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


__all__ = ["Base", "StoreEntry"]
