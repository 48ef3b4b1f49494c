from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from ..database import Base


class KVEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True)                  # e.g. "ticket:AMTS123456A1B2"
    value = Column(JSON, nullable=False)
    version = Column(Integer, nullable=False, default=1, server_default="1")  # bumped on every write
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
