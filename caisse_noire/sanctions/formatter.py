from uuid import UUID

from caisse_noire.sanctions.types import Sanction


def map_by_users(sanctions: list[Sanction]) -> dict[UUID, list[Sanction]]:
    """Group sanctions by user, keeping their order within each group."""
    mapped: dict[UUID, list[Sanction]] = {}
    for sanction in sanctions:
        mapped.setdefault(sanction.user_id, []).append(sanction)
    return mapped
