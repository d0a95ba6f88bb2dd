"""Rule catalog lookups."""

from uuid import UUID

from sqlalchemy.orm import Session

from caisse_noire.core.errors import BadReferenceError, NotFoundError
from caisse_noire.teams.repository import get_team
from caisse_noire.teams.types import Rule, Team


def load_team(session: Session, team_id: UUID) -> Team:
    """Fetch the team that owns a rule catalog.

    Raises:
        BadReferenceError: If team_id refers to no team
    """
    try:
        return get_team(session, team_id)
    except NotFoundError as e:
        raise BadReferenceError("team_id") from e


def find_rule(team: Team, rule_id: UUID) -> Rule:
    """Look a rule up in an already loaded team.

    Raises:
        BadReferenceError: If the team has no rule with this id
    """
    rule = team.get_rule(rule_id)
    if rule is None:
        raise BadReferenceError("associated_rule")
    return rule


def resolve_rule(session: Session, team_id: UUID, rule_id: UUID) -> Rule:
    """Resolve a rule from its team and identifier.

    Raises:
        BadReferenceError: On an unknown team (field team_id) or an unknown
            rule (field associated_rule)
    """
    return find_rule(load_team(session, team_id), rule_id)
