"""Utilities for resolving user-typed references to record IDs."""

from typing import Iterable

from bikeflip.domain.bike import BikeService
from bikeflip.domain.errors import NotFoundError, ValidationError


def match_id_prefix(reference: str, ids: Iterable[str], label: str) -> str:
    """Resolve a full ID or a unique ID prefix against known IDs.

    Args:
        reference: Full ID or prefix (as shown by the list commands)
        ids: Candidate IDs
        label: Record kind used in error messages (e.g. "Expense")

    Returns:
        Matching ID

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the prefix matches more than one ID
    """
    reference = reference.strip()
    if not reference:
        raise NotFoundError(f"Empty {label.lower()} reference")

    ids = list(ids)
    if reference in ids:
        return reference

    matches = [record_id for record_id in ids if record_id.startswith(reference)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValidationError(
            f"{label} reference '{reference}' matches {len(matches)} records. "
            "Use a longer ID prefix."
        )
    raise NotFoundError(f"{label} '{reference}' not found")


def resolve_bike(bike_service: BikeService, reference: str) -> str:
    """Resolve a bike reference to a bike ID.

    A reference can be the full bike ID, a unique prefix of it, or an exact
    nickname. A full ID or unique prefix wins over a nickname; an ambiguous
    prefix falls back to an exact nickname match.

    Raises:
        NotFoundError: If no bike matches
        ValidationError: If the reference is ambiguous
    """
    bikes = bike_service.list_bikes()
    ambiguous = None
    try:
        return match_id_prefix(reference, (b.id for b in bikes), "Bike")
    except NotFoundError:
        pass
    except ValidationError as exc:
        # A nickname can look like a short ID prefix
        ambiguous = exc

    nickname_matches = [b for b in bikes if b.nickname and b.nickname == reference.strip()]
    if len(nickname_matches) > 1:
        raise ValidationError(
            f"Nickname '{reference}' matches {len(nickname_matches)} bikes. Use the bike ID."
        )
    if nickname_matches:
        return nickname_matches[0].id
    if ambiguous is not None:
        raise ambiguous
    raise NotFoundError(f"Bike '{reference}' not found")
