"""StoredValue model: one opaque key/value slot of the local store"""

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone
from pulse.core.database import Base


def _now():
    return datetime.now(timezone.utc)


class StoredValue(Base):
    __tablename__ = "local_storage"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)

    updated_at = Column(DateTime, default=_now, onupdate=_now)
