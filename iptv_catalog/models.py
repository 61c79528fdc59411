"""
SQLAlchemy ORM Models for the IPTV catalog

This module defines the database model for catalog channels.
"""
from sqlalchemy import Boolean, Integer, String, Text, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models"""
    pass


class ChannelRow(Base):
    """Channel model for storing catalog channels"""
    __tablename__ = "channels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    stream_url: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    country: Mapped[str] = mapped_column(String, nullable=False)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)
    language: Mapped[str | None] = mapped_column(String, nullable=True)
    logo: Mapped[str | None] = mapped_column(String, nullable=True)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # AUTOINCREMENT keeps ids of deleted rows from being handed out again
    __table_args__ = (
        Index("idx_channels_country_code", "country_code"),
        Index("idx_channels_category", "category"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<ChannelRow(id={self.id}, name={self.name}, country_code={self.country_code})>"
