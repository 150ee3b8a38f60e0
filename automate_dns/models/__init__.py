"""SQLAlchemy ORM models."""

from automate_dns.models.base import Base
from automate_dns.models.resolver import Resolver

__all__ = ["Base", "Resolver"]
