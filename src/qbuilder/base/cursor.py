# src/qbuilder/base/cursor.py
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Tuple

from .nulls import NullValue
from .operand import Operand, get_operand, get_operand_multi
from .utils import expand_in
from .values import ValueKind, is_zero_time, value_kind

log = logging.getLogger(__name__)

PAGE_PARAM = "page"
LIMIT_PARAM = "limit"
SORT_BY_PARAM = "short_by"
SKIP_TAG = "-"

WHERE_CLAUSE_FMT = " AND {column} {operand} ?"
WHERE_CLAUSE_MULTI_FMT = " AND {column} {operand} (?)"

# (clause, args, skip)
ClauseResult = Tuple[str, List[Any], bool]


def _skip() -> ClauseResult:
    return "", [], True


class Cursor:
    """
    Classifies one tagged record field and converts its value into a clause.

    A cursor lives for a single field of a single build: the builder asks it
    what role the field plays (page, limit, sort, skipped or filter) and, for
    filters, calls make() to get the clause fragment and its arguments.
    """

    value: Any
    param: str  # tag "param", e.g. "created_at__gte"
    db: str  # tag "db", e.g. "created_at"

    def __init__(self, value: Any, param: str, db: str):
        self.value = value
        self.param = param
        self.db = db

    def __repr__(self) -> str:
        return f"Cursor(param={self.param!r}, db={self.db!r}, value={self.value!r})"

    # --- Classification ---

    def is_page(self) -> bool:
        return self.param == PAGE_PARAM

    def is_limit(self) -> bool:
        return self.param == LIMIT_PARAM

    def is_sort_by(self) -> bool:
        return self.param == SORT_BY_PARAM

    def is_empty(self) -> bool:
        return self.param in ("", SKIP_TAG) or self.db in ("", SKIP_TAG)

    def get_operand(self) -> Operand:
        return get_operand(self.param)

    def get_operand_multi(self) -> Operand:
        return get_operand_multi(self.param)

    # --- Conversion ---

    def make(self) -> ClauseResult:
        """Returns (clause, args, skip) for this field's current value."""
        kind = value_kind(self.value)
        handler = self._handlers().get(kind)
        if handler is None:
            log.debug(f"Skipping {self!r}: unsupported value type")
            return _skip()
        clause, args, skip = handler()
        if skip:
            log.debug(f"Skipping {self!r}: no filter value ({kind.value})")
        return clause, args, skip

    def _handlers(self) -> Dict[ValueKind, Callable[[], ClauseResult]]:
        return {
            ValueKind.TEXT: self._make_clause_text,
            ValueKind.NUMBER: self._make_clause_number,
            ValueKind.TIME: self._make_clause_time,
            ValueKind.NULL_TEXT: self._make_clause_null_text,
            ValueKind.NULL_NUMBER: self._make_clause_null,
            ValueKind.NULL_TIME: self._make_clause_null,
            ValueKind.COLLECTION: self._make_clause_multi,
        }

    def _make_clause(self, operand: Operand, value: Any) -> ClauseResult:
        clause = WHERE_CLAUSE_FMT.format(column=self.db, operand=operand.value)
        return clause, [value], False

    def _make_clause_string(self, value: str) -> ClauseResult:
        operand = self.get_operand()
        if operand is Operand.EQ:
            operand = Operand.LIKE
        return self._make_clause(operand, value)

    def _make_clause_text(self) -> ClauseResult:
        if self.value == "":
            return _skip()
        return self._make_clause_string(self.value)

    def _make_clause_number(self) -> ClauseResult:
        # Zero is a valid filter value.
        return self._make_clause(self.get_operand(), self.value)

    def _make_clause_time(self) -> ClauseResult:
        value: datetime = self.value
        if is_zero_time(value):
            return _skip()
        return self._make_clause(self.get_operand(), value)

    def _make_clause_null_text(self) -> ClauseResult:
        wrapper: NullValue = self.value
        if not wrapper.valid:
            return _skip()
        return self._make_clause_string(wrapper.value)

    def _make_clause_null(self) -> ClauseResult:
        wrapper: NullValue = self.value
        if not wrapper.valid:
            return _skip()
        return self._make_clause(self.get_operand(), wrapper.value)

    def _make_clause_multi(self) -> ClauseResult:
        query = WHERE_CLAUSE_MULTI_FMT.format(
            column=self.db, operand=self.get_operand_multi().value
        )
        clause, args = expand_in(query, self.value)
        if not args:
            return _skip()
        return clause, args, False
