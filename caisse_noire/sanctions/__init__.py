"""Sanctions module - rule-based pricing of team fines.

This module provides:
- Price computation from a rule and the sanction's extra info
- All-or-nothing batch validation and creation
- Listing parameters (month/year interval, grouping by user)
"""

from caisse_noire.sanctions.parameters import (
    ParameterError,
    SanctionFilters,
    parse_date_interval,
    parse_format,
    parse_sanction_filters,
)
from caisse_noire.sanctions.pricing import compute_price
from caisse_noire.sanctions.types import (
    ExtraInfo,
    MultiplicationExtraInfo,
    NewSanction,
    NoExtraInfo,
    Sanction,
    SanctionInfo,
    SanctionRequest,
)
from caisse_noire.sanctions.validator import create_sanction_batch, validate_sanction_batch

__all__ = [
    "ExtraInfo",
    "MultiplicationExtraInfo",
    "NewSanction",
    "NoExtraInfo",
    "ParameterError",
    "Sanction",
    "SanctionFilters",
    "SanctionInfo",
    "SanctionRequest",
    "compute_price",
    "create_sanction_batch",
    "parse_date_interval",
    "parse_format",
    "parse_sanction_filters",
    "validate_sanction_batch",
]
