# src/qbuilder/base/query.py
import logging
from typing import Any, Callable, List, NamedTuple, Tuple

from .cursor import Cursor
from .exceptions import InvalidArgumentException
from .schema import get_param_fields, is_record

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

BASE_WHERE_CLAUSE = " WHERE 1=1"
AND = " AND "
ORDER_BY = " ORDER BY "
LIMIT_CLAUSE_FMT = " LIMIT {offset}, {upper}"


class QueryFragment(NamedTuple):
    """The rendered clause and its positional arguments, in placeholder order."""

    clause: str
    args: List[Any]


Option = Callable[["QueryBuilder"], None]


def with_extra_limit() -> Option:
    """
    Adds 1 extra row to the LIMIT upper bound.

    The extra row lets the caller check whether a next page exists without a
    separate COUNT query, e.g. page=1 and limit=10 renders LIMIT 0, 11.
    """

    def _apply(qb: "QueryBuilder") -> None:
        qb.extra_limit = 1

    return _apply


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return default


class QueryBuilder:
    """
    Builds a WHERE / ORDER BY / LIMIT fragment from a tagged parameter record.

    Usage:
        qb = QueryBuilder(with_extra_limit())
        qb.add_where_clause("(owner_id = ? OR public = ?)", user_id, 1)
        clause, args = qb.build(params)
        rows = await conn.execute("SELECT id, name FROM product" + clause, args)

    An instance may be reused, but must not run two builds at the same time.
    """

    page: int
    limit: int
    sort_by: List[str]
    extra_limit: int

    def __init__(self, *opts: Option):
        self.extra_limit = 0
        self._custom_where_clause: List[str] = []
        self._custom_where_clause_args: List[Any] = []
        self._reset()

        for opt in opts:
            opt(self)
        log.info(f"Initializing QueryBuilder (extra_limit={self.extra_limit})")

    def _reset(self) -> None:
        self.page = DEFAULT_PAGE
        self.limit = DEFAULT_LIMIT
        self.sort_by = []
        self._args: List[Any] = []
        self._where_clause = BASE_WHERE_CLAUSE

    def add_where_clause(self, clause: str, *args: Any) -> "QueryBuilder":
        """Adds a custom clause; it is ANDed after the record's filters."""
        log.debug(f"Adding custom where clause: {clause!r} args={list(args)!r}")
        self._custom_where_clause.append(clause)
        self._custom_where_clause_args.extend(args)
        return self

    # --- Control fields ---

    @staticmethod
    def _handle_param_page(value: Any) -> int:
        return _positive_int(value, DEFAULT_PAGE)

    @staticmethod
    def _handle_param_limit(value: Any) -> int:
        return _positive_int(value, DEFAULT_LIMIT)

    @staticmethod
    def _handle_param_sort_by(value: Any) -> List[str]:
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return list(value)
        log.debug(f"Ignoring sort value of type {type(value).__name__}")
        return []

    # --- Rendering ---

    def _make_order_by_clause(self) -> str:
        terms = []
        for column in self.sort_by:
            if column.startswith("-"):
                name, direction = column[1:], "DESC"
            else:
                name, direction = column, "ASC"
            if not name:
                continue
            terms.append(f"{name} {direction}")

        if not terms:
            return ""
        return ORDER_BY + ", ".join(terms)

    def _make_limit_clause(self) -> str:
        offset = (self.page - 1) * self.limit
        return LIMIT_CLAUSE_FMT.format(
            offset=offset, upper=offset + self.limit + self.extra_limit
        )

    def _append_custom_where(self) -> None:
        for clause in self._custom_where_clause:
            self._where_clause += AND + clause
        self._args.extend(self._custom_where_clause_args)

    def build(self, param: Any) -> QueryFragment:
        """
        Translates a parameter record into a clause fragment and its arguments.

        Args:
            param: A dataclass, pydantic model, or annotated class instance.

        Returns:
            QueryFragment(clause, args).

        Raises:
            InvalidArgumentException: If param is None, a class, or not a record.
        """
        if not is_record(param):
            raise InvalidArgumentException(
                f"Parameter record must be a model instance and cannot be None, "
                f"got {type(param).__name__}"
            )

        self._reset()

        for field in get_param_fields(type(param)):
            c = Cursor(getattr(param, field.name, None), field.param, field.db)

            if c.is_page():
                self.page = self._handle_param_page(c.value)
                continue

            if c.is_limit():
                self.limit = self._handle_param_limit(c.value)
                continue

            if c.is_sort_by():
                self.sort_by = self._handle_param_sort_by(c.value)
                continue

            if c.is_empty():
                continue

            clause, args, skip = c.make()
            if skip:
                continue
            self._where_clause += clause
            self._args.extend(args)

        self._append_custom_where()

        sql_clause = (
            self._where_clause + self._make_order_by_clause() + self._make_limit_clause()
        )

        log.info(f"[qbuilder] clause: {sql_clause}")
        log.info(f"[qbuilder] args: {self._args}")

        return QueryFragment(sql_clause, list(self._args))


def validate_page_and_limit(page: int, limit: int) -> Tuple[int, int]:
    """Substitutes the default page/limit for zero values. Negatives are returned as-is."""
    if page == 0:
        page = DEFAULT_PAGE
    if limit == 0:
        limit = DEFAULT_LIMIT
    return page, limit
