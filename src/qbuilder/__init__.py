# src/qbuilder/__init__.py

"""
Query Builder Library Initialization.

This package translates tagged query-parameter records (dataclasses, pydantic
models or annotated classes) into a parameterized WHERE / ORDER BY / LIMIT
fragment plus its positional arguments.

It initializes a logger with a NullHandler and makes the builder, its options,
the record tagging helpers and the nullable value wrappers available at the
top level.
"""

import logging

# --------------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------------
# Library logs are discarded unless the consuming application configures
# logging for the "qbuilder" logger.
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.propagate = False  # Prevent log messages from propagating to the root logger

# --------------------------------------------------------------------------
# Exception Exports
# --------------------------------------------------------------------------
from .base.exceptions import InvalidArgumentException

# --------------------------------------------------------------------------
# Query Building Exports
# --------------------------------------------------------------------------
# QueryBuilder is the primary entry point; build() returns a QueryFragment.
from .base.query import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    Option,
    QueryBuilder,
    QueryFragment,
    validate_page_and_limit,
    with_extra_limit,
)
from .base.operand import Operand

# --------------------------------------------------------------------------
# Parameter Record Exports
# --------------------------------------------------------------------------
from .base.schema import Tags, param_field
from .base.nulls import NullFloat, NullInt, NullString, NullTime

# --------------------------------------------------------------------------
# Utilities
# --------------------------------------------------------------------------
from .base.utils import expand_in

__all__ = [
    # Exceptions
    "InvalidArgumentException",
    # Query
    "QueryBuilder",
    "QueryFragment",
    "Option",
    "with_extra_limit",
    "validate_page_and_limit",
    "DEFAULT_PAGE",
    "DEFAULT_LIMIT",
    "Operand",
    # Records
    "Tags",
    "param_field",
    "NullString",
    "NullInt",
    "NullFloat",
    "NullTime",
    # Utilities
    "expand_in",
    # Logging
    "logger",
]

__version__ = "0.1.0"
