"""SQLAlchemy models for the nested bucket key-value layout."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .session import Base


class Bucket(Base):
    __tablename__ = "buckets"
    __table_args__ = (UniqueConstraint("parent_id", "name", name="uq_bucket_parent_name"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    # NULL parent marks a top-level bucket
    parent_id = Column(Integer, ForeignKey("buckets.id", ondelete="CASCADE"), nullable=True)
    name = Column(String(255), nullable=False)

    entries = relationship("Entry", back_populates="bucket", cascade="all,delete-orphan")


class Entry(Base):
    __tablename__ = "entries"

    bucket_id = Column(Integer, ForeignKey("buckets.id", ondelete="CASCADE"), primary_key=True)
    key = Column(String(255), primary_key=True)
    value = Column(LargeBinary, nullable=False)

    bucket = relationship("Bucket", back_populates="entries")
