from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Date, ForeignKey, Index, Numeric, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# Wide enough for the largest rule price times the largest factor
SANCTION_PRICE_PRECISION = 24
SANCTION_PRICE_SCALE = 2


class Base(DeclarativeBase):
    """Base class for all database models."""


class Team(Base):
    """Team owning members and a pricing rule catalog.

    Rules are not a table of their own: they only change through a team
    update, so they are stored as a JSON array on the team row, in display
    order.
    """

    __tablename__ = "teams"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    rules: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)


class User(Base):
    """Team member that sanctions are levied against."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    team_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("teams.id"), nullable=False, index=True)
    firstname: Mapped[str] = mapped_column(String, nullable=False)
    lastname: Mapped[str] = mapped_column(String, nullable=False)
    nickname: Mapped[str | None] = mapped_column(String, nullable=True)
    email: Mapped[str | None] = mapped_column(String, nullable=True, unique=True)


class Sanction(Base):
    """Fine recorded against a member.

    sanction_info holds {"associated_rule": <rule id>, "extra_info": {...}}.
    The price is computed once, at creation, from the rule in force.
    """

    __tablename__ = "sanctions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    team_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("teams.id"), nullable=False)
    sanction_info: Mapped[dict] = mapped_column(JSON, nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(SANCTION_PRICE_PRECISION, SANCTION_PRICE_SCALE), nullable=False
    )
    created_at: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    __table_args__ = (
        Index("idx_sanctions_team_created_at", "team_id", "created_at"),  # Monthly listing per team
    )
