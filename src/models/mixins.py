"""Column mixins shared by the auth and catalogue tables."""

from sqlalchemy import Column, DateTime, func


class TimestampMixin:
    """Server-side created_at and updated_at, both timezone-aware."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    # onupdate only fires for ORM flushes; bulk query updates set it explicitly
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
