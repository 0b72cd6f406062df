from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class StorefrontBase(DeclarativeBase):
    """Base class for all Storefront Service database models."""

    pass


def utcnow() -> datetime:
    """Naive UTC timestamp used as the column default everywhere"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
