"""Repository functions for teams.

Rules are serialized into the team row's JSON column on every write.
"""

from uuid import UUID, uuid4

from loguru import logger
from sqlalchemy.orm import Session

from caisse_noire.core.errors import NotFoundError
from caisse_noire.db.models import Team as TeamRow
from caisse_noire.db.session import commit_or_translate
from caisse_noire.teams.types import Rule, Team, UpdateTeamRequest


def _dump_rules(rules: list[Rule]) -> list[dict]:
    return [rule.model_dump(mode="json") for rule in rules]


def get_team(session: Session, team_id: UUID) -> Team:
    """Get a team and its rule catalog.

    Raises:
        NotFoundError: If the team does not exist
    """
    row = session.get(TeamRow, team_id)
    if row is None:
        raise NotFoundError(f"The team {team_id} was not found")
    return Team.from_model(row)


def create_team(session: Session, request: UpdateTeamRequest) -> Team:
    """Create a team with its rules.

    Raises:
        DuplicatedFieldError: If two rules share an id
        UniqueViolationError: If the team name is already used
    """
    row = TeamRow(
        id=request.id or uuid4(),
        name=request.name,
        rules=_dump_rules(request.to_rules()),
    )
    session.add(row)
    commit_or_translate(session)

    logger.info("Team created", team_id=str(row.id), rules=len(row.rules))
    return Team.from_model(row)


def update_team(session: Session, team_id: UUID, request: UpdateTeamRequest) -> Team:
    """Replace a team's name and rule catalog.

    Raises:
        NotFoundError: If the team does not exist
        DuplicatedFieldError: If two rules share an id
    """
    row = session.get(TeamRow, team_id)
    if row is None:
        raise NotFoundError(f"The team {team_id} was not found")

    row.name = request.name
    row.rules = _dump_rules(request.to_rules())
    commit_or_translate(session)

    logger.info("Team updated", team_id=str(team_id), rules=len(row.rules))
    return Team.from_model(row)
