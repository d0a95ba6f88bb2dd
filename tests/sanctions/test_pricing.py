"""Tests for sanction pricing.

Covers every (extra info, rule kind) pairing:
- NONE only prices BASIC rules
- MULTIPLICATION prices MULTIPLICATION and TIME_MULTIPLICATION rules
- REGULAR_INTERVALS is never priced
"""

import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from caisse_noire.core.errors import PriceMismatchError, UnsupportedRuleKindError
from caisse_noire.db.models import SANCTION_PRICE_PRECISION, SANCTION_PRICE_SCALE
from caisse_noire.sanctions.pricing import compute_price
from caisse_noire.sanctions.types import FACTOR_MAX, MultiplicationExtraInfo, NoExtraInfo
from caisse_noire.teams.types import MultiplicationKind, Rule


def test_basic_rule_costs_its_price(basic_rule):
    assert compute_price(NoExtraInfo(), basic_rule) == Decimal("2.5")


@pytest.mark.parametrize("factor", [0, 1, 2, 7])
def test_multiplication_rule_multiplies_by_factor(multiplication_rule, factor):
    price = compute_price(MultiplicationExtraInfo(factor=factor), multiplication_rule)

    assert price == Decimal("3.5") * factor


def test_multiplication_price_is_exact(multiplication_rule):
    assert compute_price(MultiplicationExtraInfo(factor=2), multiplication_rule) == 7.0


def test_time_multiplication_rule_multiplies_price_per_unit(time_multiplication_rule):
    price = compute_price(MultiplicationExtraInfo(factor=15), time_multiplication_rule)

    assert price == Decimal("7.5")


@pytest.mark.parametrize(
    ("extra_info", "rule_fixture", "rule_kind", "extra_info_kind"),
    [
        (NoExtraInfo(), "multiplication_rule", "MULTIPLICATION", "NONE"),
        (NoExtraInfo(), "time_multiplication_rule", "TIME_MULTIPLICATION", "NONE"),
        (MultiplicationExtraInfo(factor=3), "basic_rule", "BASIC", "MULTIPLICATION"),
    ],
)
def test_incompatible_pairings_are_mismatches(request, extra_info, rule_fixture, rule_kind, extra_info_kind):
    rule = request.getfixturevalue(rule_fixture)

    with pytest.raises(PriceMismatchError) as exc_info:
        compute_price(extra_info, rule)

    error = exc_info.value
    assert not isinstance(error, UnsupportedRuleKindError)
    assert error.rule_name == rule.name
    assert error.rule_kind == rule_kind
    assert error.extra_info == extra_info_kind
    assert rule.name in error.description


@pytest.mark.parametrize("extra_info", [NoExtraInfo(), MultiplicationExtraInfo(factor=2)])
def test_regular_intervals_rule_is_never_priced(regular_intervals_rule, extra_info):
    with pytest.raises(UnsupportedRuleKindError) as exc_info:
        compute_price(extra_info, regular_intervals_rule)

    # Still reported as a pricing mismatch to callers
    assert isinstance(exc_info.value, PriceMismatchError)
    assert exc_info.value.rule_kind == "REGULAR_INTERVALS"
    assert exc_info.value.extra_info == extra_info.type


class TestPriceBounds:
    """Test that every computable price can be stored exactly."""

    def test_largest_price_fits_the_price_column(self):
        rule = Rule(
            id=uuid.uuid4(),
            name="Expensive",
            kind=MultiplicationKind(price_to_multiply=Decimal("9999999999.99")),
        )

        price = compute_price(MultiplicationExtraInfo(factor=FACTOR_MAX), rule)

        whole_digits = price.adjusted() + 1
        assert whole_digits <= SANCTION_PRICE_PRECISION - SANCTION_PRICE_SCALE
        assert price == Decimal("9999999999.99") * FACTOR_MAX

    def test_factor_is_a_32_bit_unsigned_integer(self):
        assert MultiplicationExtraInfo(factor=2**32 - 1).factor == FACTOR_MAX

        with pytest.raises(ValidationError):
            MultiplicationExtraInfo(factor=2**32)
        with pytest.raises(ValidationError):
            MultiplicationExtraInfo(factor=-1)

    @pytest.mark.parametrize("price", ["0.125", "0.005", "10000000000"])
    def test_rule_prices_that_cannot_be_stored_are_rejected(self, price):
        with pytest.raises(ValidationError):
            MultiplicationKind(price_to_multiply=Decimal(price))

    def test_cent_prices_stay_cent_prices(self, time_multiplication_rule):
        price = compute_price(MultiplicationExtraInfo(factor=3), time_multiplication_rule)

        assert price.as_tuple().exponent >= -2
