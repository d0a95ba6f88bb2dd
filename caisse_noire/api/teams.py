"""API endpoints for teams and their rule catalogs."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.orm import Session

from caisse_noire.db.session import get_db
from caisse_noire.teams.repository import create_team, get_team, update_team
from caisse_noire.teams.types import Team, UpdateTeamRequest

router = APIRouter(prefix="/teams", tags=["teams"])


@router.post("", response_model=Team, status_code=status.HTTP_201_CREATED)
def post_team(request: UpdateTeamRequest, db: Session = Depends(get_db)) -> Team:
    """Create a team with its rules."""
    logger.info("Creating team", name=request.name, rules=len(request.rules))
    return create_team(db, request)


@router.get("/{team_id}", response_model=Team)
def read_team(team_id: UUID, db: Session = Depends(get_db)) -> Team:
    return get_team(db, team_id)


@router.post("/{team_id}", response_model=Team)
def post_team_update(team_id: UUID, request: UpdateTeamRequest, db: Session = Depends(get_db)) -> Team:
    """Replace a team's name and rule catalog.

    Rules sent without an id get a new one; existing sanctions keep
    pointing at rule ids, so clients must resend ids of rules they keep.
    """
    logger.info("Updating team", team_id=str(team_id), rules=len(request.rules))
    return update_team(db, team_id, request)
