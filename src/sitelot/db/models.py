"""
SQLAlchemy ORM Models

Projects are user-created construction site records; lots hold the planning
controls looked up for a site address. A project points at zero or one lot.
"""
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, Integer, Numeric, Date, Text, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.sitelot.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Lot(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    Parcel-level planning controls for an address.

    The address is the de-facto natural key but is deliberately not unique:
    lots are matched by address at sync time only.
    """
    __tablename__ = "lots"

    address: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Address the planning controls were looked up for"
    )
    council: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Local government area name"
    )
    zone_code: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Land zoning code (e.g. R2)"
    )
    lat: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 7),
        nullable=True,
        comment="Geocoded latitude"
    )
    lng: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 7),
        nullable=True,
        comment="Geocoded longitude"
    )
    max_height_m: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(8, 2),
        nullable=True,
        comment="Maximum building height in metres"
    )
    fsr: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(6, 2),
        nullable=True,
        comment="Floor space ratio"
    )
    min_lot_size_sqm: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Minimum lot size in square metres"
    )

    __table_args__ = (
        Index("idx_lots_address", "address"),
    )

    def __repr__(self) -> str:
        return f"<Lot(id={self.id}, address={self.address}, zone_code={self.zone_code})>"


class Project(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Construction project record, optionally linked to one lot."""
    __tablename__ = "projects"

    site_address: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Site street address"
    )
    project_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Project type (e.g. New Dwelling)"
    )
    size_storeys: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Number of storeys"
    )
    budget_band: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Budget band label"
    )
    target_timeline: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        comment="Target completion date"
    )

    lot_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("lots.id"),
        nullable=True,
        comment="Linked lot, set once during enrichment"
    )
    lot: Mapped[Optional["Lot"]] = relationship("Lot")

    __table_args__ = (
        Index("idx_projects_created_at", "created_at"),
        Index("idx_projects_lot_id", "lot_id"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, site_address={self.site_address})>"
