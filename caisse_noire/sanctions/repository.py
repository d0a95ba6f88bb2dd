"""Repository functions for sanctions."""

from datetime import date
from uuid import UUID

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from caisse_noire.core.errors import NotFoundError
from caisse_noire.db.models import Sanction as SanctionRow
from caisse_noire.db.session import commit_or_translate
from caisse_noire.sanctions.types import NewSanction, Sanction


def get_sanctions(
    session: Session,
    team_id: UUID,
    date_interval: tuple[date, date] | None = None,
) -> list[Sanction]:
    """List a team's sanctions, oldest first.

    Args:
        session: Database session
        team_id: Team to list sanctions for
        date_interval: Optional inclusive (start, end) filter on created_at
    """
    query = select(SanctionRow).where(SanctionRow.team_id == team_id)

    if date_interval is not None:
        start, end = date_interval
        query = query.where(SanctionRow.created_at.between(start, end))

    query = query.order_by(SanctionRow.created_at, SanctionRow.id)

    rows = session.execute(query).scalars().all()
    return [Sanction.from_model(row) for row in rows]


def create_sanctions(session: Session, sanctions: list[NewSanction]) -> list[Sanction]:
    """Insert a batch of sanctions in a single transaction.

    Either every sanction is inserted or none is.

    Raises:
        ForeignKeyViolationError: If a user or team id refers to nothing
        UniqueViolationError: If a sanction id is already used
    """
    rows = [
        SanctionRow(
            id=sanction.id,
            user_id=sanction.user_id,
            team_id=sanction.team_id,
            sanction_info=sanction.sanction_info.model_dump(mode="json"),
            price=sanction.price,
            created_at=sanction.created_at,
        )
        for sanction in sanctions
    ]
    session.add_all(rows)
    commit_or_translate(session)

    logger.info("Sanctions created", count=len(rows))
    return [Sanction.from_model(row) for row in rows]


def delete_sanction(session: Session, team_id: UUID, sanction_id: UUID) -> Sanction:
    """Delete one sanction of a team and return it.

    Raises:
        NotFoundError: If the team has no such sanction
    """
    row = session.execute(
        select(SanctionRow).where(SanctionRow.team_id == team_id, SanctionRow.id == sanction_id)
    ).scalar_one_or_none()
    if row is None:
        raise NotFoundError(f"The sanction {sanction_id} was not found")

    deleted = Sanction.from_model(row)
    session.delete(row)
    commit_or_translate(session)

    logger.info("Sanction deleted", team_id=str(team_id), sanction_id=str(sanction_id))
    return deleted
