import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, func, ForeignKey, JSON
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import relationship
from app.config.database_config import Base


def utc_now() -> datetime:
    """Naive UTC timestamp, matching a DATETIME column without a time zone."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Form(Base):
    __tablename__ = "forms"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    fields = Column(JSON, nullable=False)

    # Name of the provisioned table; the unique constraint settles concurrent creates
    table_name = Column(String(64), nullable=False, unique=True)

    # Owner id from the identity service, no local users table
    created_by = Column(String(36), nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime,
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    responses = relationship("FormResponse", back_populates="form", passive_deletes=True)


class FormResponse(Base):
    __tablename__ = "form_responses"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    form_id = Column(
        String(36),
        ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Verbatim submitted payload, the source of truth for the response
    data = Column(JSON, nullable=False)

    # Plain MySQL DATETIME truncates to whole seconds
    submitted_at = Column(
        DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql"),
        default=utc_now,
        nullable=False,
        index=True,
    )

    form = relationship("Form", back_populates="responses")
