"""Repository functions for team members."""

from uuid import UUID, uuid4

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from caisse_noire.core.errors import NotFoundError
from caisse_noire.db.models import User as UserRow
from caisse_noire.db.session import commit_or_translate
from caisse_noire.users.types import UpdateUserRequest, User


def _get_user_row(session: Session, team_id: UUID, user_id: UUID) -> UserRow:
    row = session.execute(
        select(UserRow).where(UserRow.team_id == team_id, UserRow.id == user_id)
    ).scalar_one_or_none()
    if row is None:
        raise NotFoundError(f"The user {user_id} was not found")
    return row


def get_users(session: Session, team_id: UUID) -> list[User]:
    """List the members of a team, ordered by last name."""
    rows = session.execute(
        select(UserRow).where(UserRow.team_id == team_id).order_by(UserRow.lastname, UserRow.firstname)
    ).scalars().all()
    return [User.from_model(row) for row in rows]


def get_user(session: Session, team_id: UUID, user_id: UUID) -> User:
    """Get one member of a team.

    Raises:
        NotFoundError: If the team has no such user
    """
    return User.from_model(_get_user_row(session, team_id, user_id))


def create_user(session: Session, team_id: UUID, request: UpdateUserRequest) -> User:
    """Add a member to a team.

    Raises:
        ForeignKeyViolationError: If the team does not exist
        UniqueViolationError: If the email is already used
    """
    row = UserRow(id=uuid4(), team_id=team_id, **request.model_dump())
    session.add(row)
    commit_or_translate(session)

    logger.info("User created", team_id=str(team_id), user_id=str(row.id))
    return User.from_model(row)


def update_user(session: Session, team_id: UUID, user_id: UUID, request: UpdateUserRequest) -> User:
    """Replace a member's details.

    Raises:
        NotFoundError: If the team has no such user
        UniqueViolationError: If the new email is already used
    """
    row = _get_user_row(session, team_id, user_id)
    for field, value in request.model_dump().items():
        setattr(row, field, value)
    commit_or_translate(session)

    logger.info("User updated", team_id=str(team_id), user_id=str(user_id))
    return User.from_model(row)
