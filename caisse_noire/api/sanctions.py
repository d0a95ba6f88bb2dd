"""API endpoints for sanctions.

Query parameters are read as raw strings and validated by
caisse_noire.sanctions.parameters so that errors carry the BAD_PARAMETER
kind instead of a generic decoding error.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from sqlalchemy.orm import Session

from caisse_noire.db.session import get_db
from caisse_noire.sanctions.formatter import map_by_users
from caisse_noire.sanctions.parameters import parse_sanction_filters
from caisse_noire.sanctions.repository import delete_sanction, get_sanctions
from caisse_noire.sanctions.types import Sanction, SanctionRequest
from caisse_noire.sanctions.validator import create_sanction_batch

router = APIRouter(prefix="/teams/{team_id}/sanctions", tags=["sanctions"])


@router.get("", response_model=list[Sanction] | dict[UUID, list[Sanction]])
def list_sanctions(
    team_id: UUID,
    format_value: str | None = Query(None, alias="format", description="'true' to group sanctions by user"),
    month: str | None = Query(None, description="Month (1-12), requires year"),
    year: str | None = Query(None, description="Year, requires month"),
    db: Session = Depends(get_db),
) -> list[Sanction] | dict[UUID, list[Sanction]]:
    """List a team's sanctions, optionally for one month and grouped by user."""
    filters = parse_sanction_filters(format_value, month, year)

    sanctions = get_sanctions(db, team_id, filters.date_interval)

    if filters.must_be_formatted:
        return map_by_users(sanctions)
    return sanctions


@router.post("", response_model=list[Sanction], status_code=status.HTTP_201_CREATED)
def post_sanctions(
    team_id: UUID,
    requests: list[SanctionRequest],
    db: Session = Depends(get_db),
) -> list[Sanction]:
    """Create a batch of sanctions.

    The batch is all-or-nothing: if any entry is invalid, none is created.
    """
    logger.info("Creating sanctions", team_id=str(team_id), batch_size=len(requests))
    return create_sanction_batch(db, team_id, requests)


@router.delete("/{sanction_id}", response_model=Sanction)
def remove_sanction(team_id: UUID, sanction_id: UUID, db: Session = Depends(get_db)) -> Sanction:
    return delete_sanction(db, team_id, sanction_id)
