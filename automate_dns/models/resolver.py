"""Resolver model — a (provider, hostname) → IPv4 mapping with soft delete."""

from sqlalchemy import Boolean, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from automate_dns.models.base import Base, TimestampMixin


class Resolver(TimestampMixin, Base):
    __tablename__ = "resolvers"
    __table_args__ = (
        # Uniqueness only among live rows so a deleted pair can be reused
        Index(
            "uq_resolvers_provider_hostname_live",
            "provider",
            "hostname",
            unique=True,
            sqlite_where=text("NOT is_deleted"),
            postgresql_where=text("NOT is_deleted"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    provider: Mapped[str] = mapped_column(String(255), nullable=False)
    hostname: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    alias: Mapped[str] = mapped_column(String(255), nullable=False, default="", server_default="")
    # "" means no address assigned
    ipv4: Mapped[str] = mapped_column(String(15), nullable=False, default="", server_default="")

    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    def __repr__(self) -> str:
        return f"<Resolver id={self.id} provider={self.provider!r} hostname={self.hostname!r}>"
