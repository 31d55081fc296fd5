"""
Ingestion boundary for raw referral payloads.

Coerces backend rows into RelationEntry once, so the builder, filter and
auditor can rely on a fixed shape.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from referral_tree.core.models import RelationEntry
from referral_tree.exceptions import InvalidRelationEntryError


def coerce_entry(raw: Mapping[str, Any] | RelationEntry, index: int | None = None) -> RelationEntry:
    """
    Coerce one raw row into a RelationEntry.

    Args:
        raw: Backend row (camelCase or snake_case keys) or an entry
        index: Row position, used in error messages

    Returns:
        Validated RelationEntry

    Raises:
        InvalidRelationEntryError: If the row cannot be validated
    """
    if isinstance(raw, RelationEntry):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidRelationEntryError(
            index, [{"loc": (), "msg": f"expected mapping, got {type(raw).__name__}"}]
        )
    try:
        return RelationEntry.model_validate(dict(raw))
    except ValidationError as exc:
        raise InvalidRelationEntryError(index, exc.errors()) from exc


def extract_rows(payload: Any) -> list[Any]:
    """
    Unwrap the flat tree list from an API response.

    Accepts a bare list, {"tree": [...]} or {"data": {"tree": [...]}}.

    Raises:
        InvalidRelationEntryError: If no row list can be found
    """
    if isinstance(payload, Mapping):
        if isinstance(payload.get("data"), Mapping):
            payload = payload["data"]
        payload = payload.get("tree", payload)

    if isinstance(payload, list | tuple):
        return list(payload)

    raise InvalidRelationEntryError(
        None, [{"loc": ("tree",), "msg": "referral tree list not found"}]
    )


def parse_entries(
    payload: Any,
    skip_invalid: bool = True,
) -> list[RelationEntry]:
    """
    Parse backend payload into RelationEntry list.

    Args:
        payload: Row list or API envelope
        skip_invalid: Log and drop invalid rows instead of raising

    Returns:
        Entries in payload order

    Raises:
        InvalidRelationEntryError: On invalid row when skip_invalid is False
    """
    entries = []
    skipped = 0
    for index, raw in enumerate(extract_rows(payload)):
        try:
            entries.append(coerce_entry(raw, index))
        except InvalidRelationEntryError as exc:
            if not skip_invalid:
                raise
            skipped += 1
            logger.warning(f"Skipping invalid referral row: {exc}")

    logger.debug(
        "Referral entries parsed",
        extra={"entries": len(entries), "skipped": skipped},
    )

    return entries
