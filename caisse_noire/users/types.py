from uuid import UUID

from pydantic import BaseModel


class UpdateUserRequest(BaseModel):
    """Body of user creation and user update requests."""

    firstname: str
    lastname: str
    nickname: str | None = None
    email: str | None = None


class User(BaseModel):
    """Team member."""

    id: UUID
    team_id: UUID
    firstname: str
    lastname: str
    nickname: str | None = None
    email: str | None = None

    @classmethod
    def from_model(cls, user) -> "User":
        """Create domain user from a caisse_noire.db.models.User row."""
        return cls(
            id=user.id,
            team_id=user.team_id,
            firstname=user.firstname,
            lastname=user.lastname,
            nickname=user.nickname,
            email=user.email,
        )
