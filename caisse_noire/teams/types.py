"""Domain types for teams and their pricing rules.

RuleKind is a closed tagged union: the JSON tag "type" selects one of the
four kinds below. Adding a kind requires a matching branch in
caisse_noire.sanctions.pricing.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, NonNegativeInt, PlainSerializer

from caisse_noire.core.errors import DuplicatedFieldError

_AS_JSON_NUMBER = PlainSerializer(float, return_type=float, when_used="json")

# Non-negative amount in cents, exchanged as a JSON number
Money = Annotated[Decimal, Field(ge=0, decimal_places=2), _AS_JSON_NUMBER]

# Bounded so that price * factor always fits caisse_noire.db.models.Sanction.price
RULE_PRICE_MAX_DIGITS = 12
RulePrice = Annotated[Decimal, Field(ge=0, max_digits=RULE_PRICE_MAX_DIGITS, decimal_places=2), _AS_JSON_NUMBER]


class RuleCategory(StrEnum):
    GAME_DAY = "GAME_DAY"
    TRAINING_DAY = "TRAINING_DAY"


class TimeUnit(StrEnum):
    SECOND = "SECOND"
    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class BasicKind(BaseModel):
    """Fixed price per sanction."""

    type: Literal["BASIC"] = "BASIC"
    price: RulePrice


class MultiplicationKind(BaseModel):
    """Price multiplied by the factor given with the sanction."""

    type: Literal["MULTIPLICATION"] = "MULTIPLICATION"
    price_to_multiply: RulePrice


class TimeMultiplicationKind(BaseModel):
    """Price per time unit, multiplied by the number of units (e.g. minutes late)."""

    type: Literal["TIME_MULTIPLICATION"] = "TIME_MULTIPLICATION"
    price_per_time_unit: RulePrice
    time_unit: TimeUnit


class RegularIntervalsKind(BaseModel):
    """Price charged every interval_in_time_unit time units.

    Can be stored on a team but has no price formula yet.
    """

    type: Literal["REGULAR_INTERVALS"] = "REGULAR_INTERVALS"
    price: RulePrice
    interval_in_time_unit: NonNegativeInt
    time_unit: TimeUnit


RuleKind = Annotated[
    BasicKind | MultiplicationKind | TimeMultiplicationKind | RegularIntervalsKind,
    Field(discriminator="type"),
]


class Rule(BaseModel):
    """Named pricing policy of a team."""

    id: UUID
    name: str
    category: RuleCategory = RuleCategory.TRAINING_DAY
    description: str = ""
    kind: RuleKind


class Team(BaseModel):
    """Team with its ordered rule catalog."""

    id: UUID
    name: str
    rules: list[Rule] = Field(default_factory=list)

    def get_rule(self, rule_id: UUID) -> Rule | None:
        """Return the rule with the given id, or None."""
        return next((rule for rule in self.rules if rule.id == rule_id), None)

    @classmethod
    def from_model(cls, team) -> Team:
        """Create domain team from a caisse_noire.db.models.Team row."""
        return cls(id=team.id, name=team.name, rules=team.rules or [])


class UpdateRuleRequest(BaseModel):
    """Rule as sent by clients; the id is generated when omitted."""

    id: UUID | None = None
    name: str
    category: RuleCategory = RuleCategory.TRAINING_DAY
    description: str = ""
    kind: RuleKind

    def to_rule(self) -> Rule:
        return Rule(
            id=self.id or uuid4(),
            name=self.name,
            category=self.category,
            description=self.description,
            kind=self.kind,
        )


class UpdateTeamRequest(BaseModel):
    """Body of team creation and team update requests."""

    id: UUID | None = None
    name: str
    rules: list[UpdateRuleRequest] = Field(default_factory=list)

    def to_rules(self) -> list[Rule]:
        """Build the rule catalog, keeping request order.

        Raises:
            DuplicatedFieldError: If two rules share the same id
        """
        rules = [rule_request.to_rule() for rule_request in self.rules]

        seen: set[UUID] = set()
        for rule in rules:
            if rule.id in seen:
                raise DuplicatedFieldError("rules.id")
            seen.add(rule.id)

        return rules
