"""Sanction pricing.

Supported pairings:
- NONE + BASIC -> price
- MULTIPLICATION + MULTIPLICATION -> price_to_multiply * factor
- MULTIPLICATION + TIME_MULTIPLICATION -> price_per_time_unit * factor

Any other pairing is a mismatch. REGULAR_INTERVALS rules are never priced.
"""

from decimal import Decimal

from caisse_noire.core.errors import PriceMismatchError, UnsupportedRuleKindError
from caisse_noire.sanctions.types import ExtraInfo, MultiplicationExtraInfo, NoExtraInfo
from caisse_noire.teams.types import (
    BasicKind,
    MultiplicationKind,
    RegularIntervalsKind,
    Rule,
    TimeMultiplicationKind,
)


def compute_price(extra_info: ExtraInfo, rule: Rule) -> Decimal:
    """Compute what a sanction costs under a rule.

    Args:
        extra_info: Extra info supplied with the sanction
        rule: Rule the sanction is associated with

    Returns:
        Non-negative price

    Raises:
        UnsupportedRuleKindError: If the rule kind has no price formula
        PriceMismatchError: If the extra info does not fit the rule kind
    """
    kind = rule.kind

    if isinstance(kind, RegularIntervalsKind):
        raise UnsupportedRuleKindError(rule.name, kind.type, extra_info.type)

    if isinstance(extra_info, NoExtraInfo):
        if isinstance(kind, BasicKind):
            return kind.price
    elif isinstance(extra_info, MultiplicationExtraInfo):
        if isinstance(kind, MultiplicationKind):
            return kind.price_to_multiply * extra_info.factor
        if isinstance(kind, TimeMultiplicationKind):
            return kind.price_per_time_unit * extra_info.factor

    raise PriceMismatchError(rule.name, kind.type, extra_info.type)
