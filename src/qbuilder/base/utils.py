import logging
from typing import Any, List, Sequence, Tuple

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"
IN_GROUP = "(?)"


def expand_in(query: str, values: Sequence[Any]) -> Tuple[str, List[Any]]:
    """
    Expand the single `(?)` group in a query into one placeholder per value.

    Returns the rewritten query and the values as a flat list, in order.
    An empty sequence leaves the group as `()` and returns no arguments;
    callers treat that as "nothing to filter on".

    Args:
        query: SQL text containing exactly one `(?)` group.
        values: The values bound to the group.

    Returns:
        Tuple of (query, args).

    Raises:
        ValueError: If the query has no `(?)` group or values is not a sequence.

    Example:
        >>> expand_in(" AND status IN (?)", ["A", "B"])
        (' AND status IN (?, ?)', ['A', 'B'])
    """
    if IN_GROUP not in query:
        raise ValueError(f"Query has no '{IN_GROUP}' group to expand: {query!r}")
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ValueError(
            f"expand_in requires a list or tuple, got {type(values).__name__}"
        )

    args = list(values)
    placeholders = ", ".join([PLACEHOLDER] * len(args))
    expanded = query.replace(IN_GROUP, f"({placeholders})", 1)
    logger.debug(f"Expanded IN group to {len(args)} placeholder(s)")
    return expanded, args


def count_placeholders(clause: str) -> int:
    """Number of positional `?` placeholders in a clause."""
    return clause.count(PLACEHOLDER)
