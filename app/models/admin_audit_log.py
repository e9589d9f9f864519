from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime, UTC

from app.db import Base


class AdminAuditLog(Base):
    __tablename__ = "admin_audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    admin_user_id = Column(String, nullable=False, index=True)
    action = Column(String(32), nullable=False)  # create / update / delete / grant / reset
    resource_type = Column(String(64), nullable=False, index=True)
    resource_id = Column(String(64), nullable=True)
    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None), index=True)
