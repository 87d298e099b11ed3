# src/qbuilder/base/operand.py
"""Operand inference from `param` tag suffixes (e.g. `created_at__gte`)."""

from enum import Enum
from typing import Dict, Optional, Tuple

SUFFIX_SEPARATOR = "__"


class Operand(Enum):
    """SQL comparison and membership operators emitted in filter clauses."""

    # Comparison
    EQ = "="
    NEQ = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    # Text
    LIKE = "LIKE"
    # Membership
    IN = "IN"
    NOT_IN = "NOT IN"


# Suffixes that change the operand of a single-value filter.
SINGLE_SUFFIX_OPERANDS: Dict[str, Operand] = {
    "gt": Operand.GT,
    "gte": Operand.GTE,
    "lt": Operand.LT,
    "lte": Operand.LTE,
    "neq": Operand.NEQ,
}

# Suffixes that change the operand of a collection filter.
MULTI_SUFFIX_OPERANDS: Dict[str, Operand] = {
    "nin": Operand.NOT_IN,
}

KNOWN_SUFFIXES = frozenset(SINGLE_SUFFIX_OPERANDS) | frozenset(MULTI_SUFFIX_OPERANDS)


def split_param_name(param: str) -> Tuple[str, Optional[str]]:
    """
    Splits a `param` tag into its base name and operand suffix.

    Only known suffixes are split off; anything else is part of the name.

    >>> split_param_name("created_at__gte")
    ('created_at', 'gte')
    >>> split_param_name("status")
    ('status', None)
    >>> split_param_name("first__name")
    ('first__name', None)
    """
    base, sep, suffix = param.rpartition(SUFFIX_SEPARATOR)
    if sep and base and suffix in KNOWN_SUFFIXES:
        return base, suffix
    return param, None


def get_operand(param: str) -> Operand:
    """Operand for a single-value filter; defaults to `=`."""
    _, suffix = split_param_name(param)
    return SINGLE_SUFFIX_OPERANDS.get(suffix, Operand.EQ)


def get_operand_multi(param: str) -> Operand:
    """Operand for a collection filter; defaults to `IN`."""
    _, suffix = split_param_name(param)
    return MULTI_SUFFIX_OPERANDS.get(suffix, Operand.IN)
