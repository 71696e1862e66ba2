import datetime as dt
from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from approveflow.db.base import Base


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class KeyValue(Base):
    """One persisted blob per key. The project list lives under a single key."""

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
