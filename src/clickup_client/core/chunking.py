from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence, TypeVar

from .errors import ClickUpValidationError

# Inclusive bounds the bulk endpoints accept per call.
MIN_BULK_IDS = 2
MAX_BULK_IDS = 100

V = TypeVar("V")


def validate_bulk_size(
    ids: Sequence[str],
    *,
    minimum: int = MIN_BULK_IDS,
    maximum: int = MAX_BULK_IDS,
) -> None:
    if len(ids) < minimum or len(ids) > maximum:
        raise ClickUpValidationError(
            f"must provide between {minimum} and {maximum} ids per bulk request, "
            f"got {len(ids)}."
        )


def chunk_ids(ids: Sequence[str], size: int = MAX_BULK_IDS) -> List[List[str]]:
    """
    Split ids into contiguous slices of at most ``size``, preserving order.

    Concatenating the result gives back ``ids``; only the last slice may be
    shorter than ``size``.
    """
    if size < 1:
        raise ClickUpValidationError("chunk size must be at least 1.")
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]


def merge_chunk_results(results: Iterable[Mapping[str, V]]) -> Dict[str, V]:
    merged: Dict[str, V] = {}
    for result in results:
        merged.update(result)
    return merged


__all__ = [
    "MIN_BULK_IDS",
    "MAX_BULK_IDS",
    "validate_bulk_size",
    "chunk_ids",
    "merge_chunk_results",
]
