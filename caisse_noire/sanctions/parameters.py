"""Query parameters of the sanctions listing.

Supported parameters:
- format: "true" groups the result by user, "false" (or absent) does not
- month + year: restrict the result to one calendar month; they must be
  given together
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date

from caisse_noire.core.errors import CaisseNoireError

FORMAT = "format"
MONTH = "month"
YEAR = "year"

# ASCII digits only, int() alone would accept any Unicode digit
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class UnvalidType:
    expected_type: str


@dataclass(frozen=True)
class UnvalidValue:
    parameter_value: str
    reason: str


@dataclass(frozen=True)
class UnvalidCombination:
    missing_parameters: list[str]


ParameterErrorKind = UnvalidType | UnvalidValue | UnvalidCombination


def _describe(parameter_name: str, kind: ParameterErrorKind) -> str:
    if isinstance(kind, UnvalidType):
        return f"The parameter {parameter_name} must be a {kind.expected_type}"
    if isinstance(kind, UnvalidValue):
        return f"The value {kind.parameter_value} of the parameter {parameter_name} is not valid. {kind.reason}"
    return f"The parameter {parameter_name} requires the parameters: {', '.join(kind.missing_parameters)}"


class ParameterError(CaisseNoireError):
    """Raised when a query parameter is malformed or incompatible with others.

    Attributes:
        parameter_name: Name of the offending parameter
        kind: What is wrong with it
    """

    def __init__(self, parameter_name: str, kind: ParameterErrorKind) -> None:
        self.parameter_name = parameter_name
        self.kind = kind
        super().__init__(_describe(parameter_name, kind))


@dataclass(frozen=True)
class SanctionFilters:
    """Parsed listing parameters."""

    must_be_formatted: bool = False
    date_interval: tuple[date, date] | None = None


def parse_format(value: str | None) -> bool:
    """Parse the format parameter.

    Absent means False. Only the exact strings "true" and "false" are
    accepted otherwise.

    Raises:
        ParameterError: UnvalidType(expected "boolean") for any other value
    """
    if value is None:
        return False
    if value == "true":
        return True
    if value == "false":
        return False
    raise ParameterError(FORMAT, UnvalidType(expected_type="boolean"))


def _parse_year(value: str) -> int:
    if not _SIGNED_INT.fullmatch(value):
        raise ParameterError(YEAR, UnvalidType(expected_type="number"))
    year = int(value)
    if year < MINYEAR or year > MAXYEAR:
        raise ParameterError(
            YEAR,
            UnvalidValue(parameter_value=value, reason=f"This value must be between {MINYEAR} and {MAXYEAR}"),
        )
    return year


def _parse_month(value: str) -> int:
    if not _UNSIGNED_INT.fullmatch(value):
        raise ParameterError(MONTH, UnvalidType(expected_type="number"))
    month = int(value)
    if month < 1 or month > 12:
        raise ParameterError(
            MONTH,
            UnvalidValue(parameter_value=str(month), reason="This value must be between 1 and 12"),
        )
    return month


def parse_date_interval(month: str | None, year: str | None) -> tuple[date, date] | None:
    """Parse month and year into an inclusive date interval.

    Each present parameter is validated on its own first, then the pair is
    checked for completeness.

    Args:
        month: Raw month parameter (1-12)
        year: Raw year parameter

    Returns:
        (first day of the month, last day of the month), or None when
        neither parameter is given

    Raises:
        ParameterError: On a malformed value or when only one of the two
            parameters is given
    """
    parsed_year = _parse_year(year) if year is not None else None
    parsed_month = _parse_month(month) if month is not None else None

    if parsed_year is None and parsed_month is None:
        return None
    if parsed_month is None:
        raise ParameterError(YEAR, UnvalidCombination(missing_parameters=[MONTH]))
    if parsed_year is None:
        raise ParameterError(MONTH, UnvalidCombination(missing_parameters=[YEAR]))

    # Last day of the month, i.e. the day before the first of the next one
    _, last_day = calendar.monthrange(parsed_year, parsed_month)
    return date(parsed_year, parsed_month, 1), date(parsed_year, parsed_month, last_day)


def parse_sanction_filters(
    format_value: str | None = None,
    month: str | None = None,
    year: str | None = None,
) -> SanctionFilters:
    """Parse every listing parameter, format first.

    Raises:
        ParameterError: On the first invalid parameter
    """
    must_be_formatted = parse_format(format_value)
    date_interval = parse_date_interval(month, year)
    return SanctionFilters(must_be_formatted=must_be_formatted, date_interval=date_interval)
