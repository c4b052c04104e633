from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from .database import Base


class StoredCollection(Base):
    """One named collection (stockItems, stockTransactions, ...) serialized as JSON."""
    __tablename__ = "collections"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
