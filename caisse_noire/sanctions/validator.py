"""Batch validation and creation of sanctions.

A batch is all-or-nothing: requests are checked in order and the first
failure rejects the whole batch before anything reaches the database.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from loguru import logger
from sqlalchemy.orm import Session

from caisse_noire.core.errors import BadReferenceError, PriceMismatchError
from caisse_noire.sanctions.pricing import compute_price
from caisse_noire.sanctions.repository import create_sanctions
from caisse_noire.sanctions.types import NewSanction, Sanction, SanctionRequest
from caisse_noire.teams.catalog import find_rule, load_team


def build_new_sanction(team_id: UUID, request: SanctionRequest, price: Decimal, today: date) -> NewSanction:
    """Turn a validated request into an insertable sanction."""
    return NewSanction(
        id=request.id or uuid4(),
        user_id=request.user_id,
        team_id=team_id,
        sanction_info=request.sanction_info,
        price=price,
        created_at=request.created_at or today,
    )


def validate_sanction_batch(
    session: Session,
    team_id: UUID,
    requests: Sequence[SanctionRequest],
    today: date | None = None,
) -> list[NewSanction]:
    """Validate and price a batch of sanction requests.

    The team is loaded once; each request is then resolved against its rule
    catalog in input order.

    Args:
        session: Database session (read only here)
        team_id: Team the sanctions belong to
        requests: Requests in client order
        today: Date given to requests without created_at (defaults to today)

    Returns:
        Insertable sanctions, in request order

    Raises:
        BadReferenceError: Unknown team or rule (first one in order)
        PriceMismatchError: Extra info incompatible with its rule
    """
    today = today or date.today()
    team = load_team(session, team_id)

    sanctions: list[NewSanction] = []
    for position, request in enumerate(requests):
        try:
            rule = find_rule(team, request.sanction_info.associated_rule)
            price = compute_price(request.sanction_info.extra_info, rule)
        except (BadReferenceError, PriceMismatchError) as e:
            logger.warning(
                "Sanction batch rejected",
                team_id=str(team_id),
                position=position,
                batch_size=len(requests),
                reason=e.description,
            )
            raise
        sanctions.append(build_new_sanction(team_id, request, price, today))

    return sanctions


def create_sanction_batch(
    session: Session,
    team_id: UUID,
    requests: Sequence[SanctionRequest],
    today: date | None = None,
) -> list[Sanction]:
    """Validate a batch, then persist it with a single insert.

    Raises:
        BadReferenceError: Unknown team or rule
        PriceMismatchError: Extra info incompatible with its rule
        DbError: The database rejected the insert (nothing is persisted)
    """
    sanctions = validate_sanction_batch(session, team_id, requests, today=today)
    return create_sanctions(session, sanctions)
