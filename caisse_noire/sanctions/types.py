"""Domain types for sanctions.

ExtraInfo is the per-sanction data a rule kind may need to compute a price.
Like RuleKind it is a closed tagged union keyed by "type".
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from caisse_noire.teams.types import Money

# Largest factor accepted, a 32-bit unsigned integer
FACTOR_MAX = 2**32 - 1


class NoExtraInfo(BaseModel):
    type: Literal["NONE"] = "NONE"


class MultiplicationExtraInfo(BaseModel):
    type: Literal["MULTIPLICATION"] = "MULTIPLICATION"
    factor: int = Field(ge=0, le=FACTOR_MAX)


ExtraInfo = Annotated[
    NoExtraInfo | MultiplicationExtraInfo,
    Field(discriminator="type"),
]


class SanctionInfo(BaseModel):
    """Rule a sanction applies and the extra info needed to price it."""

    associated_rule: UUID
    extra_info: ExtraInfo = Field(default_factory=NoExtraInfo)


class SanctionRequest(BaseModel):
    """One entry of a batch creation request.

    Attributes:
        id: Optional client-supplied identifier (generated when omitted)
        user_id: Sanctioned member
        sanction_info: Rule and extra info
        created_at: Optional date (today when omitted)
    """

    id: UUID | None = None
    user_id: UUID
    sanction_info: SanctionInfo
    created_at: date | None = None


class NewSanction(BaseModel):
    """Validated, priced sanction ready to be inserted."""

    id: UUID
    user_id: UUID
    team_id: UUID
    sanction_info: SanctionInfo
    price: Money
    created_at: date


class Sanction(NewSanction):
    """Persisted sanction."""

    @classmethod
    def from_model(cls, sanction) -> Sanction:
        """Create domain sanction from a caisse_noire.db.models.Sanction row."""
        return cls(
            id=sanction.id,
            user_id=sanction.user_id,
            team_id=sanction.team_id,
            sanction_info=sanction.sanction_info,
            price=sanction.price,
            created_at=sanction.created_at,
        )
