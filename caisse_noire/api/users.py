"""API endpoints for team members."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from caisse_noire.db.session import get_db
from caisse_noire.users.repository import create_user, get_user, get_users, update_user
from caisse_noire.users.types import UpdateUserRequest, User

router = APIRouter(prefix="/teams/{team_id}/users", tags=["users"])


@router.get("", response_model=list[User])
def list_users(team_id: UUID, db: Session = Depends(get_db)) -> list[User]:
    return get_users(db, team_id)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def post_user(team_id: UUID, request: UpdateUserRequest, db: Session = Depends(get_db)) -> User:
    return create_user(db, team_id, request)


@router.get("/{user_id}", response_model=User)
def read_user(team_id: UUID, user_id: UUID, db: Session = Depends(get_db)) -> User:
    return get_user(db, team_id, user_id)


@router.post("/{user_id}", response_model=User)
def post_user_update(
    team_id: UUID,
    user_id: UUID,
    request: UpdateUserRequest,
    db: Session = Depends(get_db),
) -> User:
    return update_user(db, team_id, user_id, request)
