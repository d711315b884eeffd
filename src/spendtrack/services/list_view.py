"""Client-side list state for the income and expense screens.

A :class:`ListViewController` owns the collection fetched from the API and
derives the rows a screen shows from it::

    filtered = [r for r in authoritative if every active filter matches r]
    ordered  = stable sort of filtered by the active sort field
    rows     = ordered[(page - 1) * size : page * size]

The derivation runs after every operation, so callers only ever read a
consistent :class:`ListPage`. Remote failures raised by the repository
(``ServiceError``) are returned as :class:`ListResult` values and leave the
state exactly as it was.
"""

from __future__ import annotations

import locale
import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypeVar

from ..domain.repositories import RecordRepository
from ..errors import ServiceError
from ..logging_config import get_logger
from ..models.category import Category
from ..models.record import LedgerRecord, RecordId

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=LedgerRecord)
Accessor = Callable[[Any], Any]

ASCENDING = "asc"
DESCENDING = "desc"
DIRECTIONS = (ASCENDING, DESCENDING)

TEXT = "text"
CATEGORY = "category"
MIN_AMOUNT = "min_amount"
ON_DATE = "date"
FILTER_KINDS = (TEXT, CATEGORY, MIN_AMOUNT, ON_DATE)

ALL_CATEGORIES = "all"

_UNCHANGED = object()


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


@dataclass(frozen=True)
class FilterField:
    """One filterable attribute of a record and how to match it."""

    kind: str
    accessor: Accessor

    def __post_init__(self) -> None:
        if self.kind not in FILTER_KINDS:
            raise ValueError(f"Unknown filter kind: {self.kind}")

    def is_active(self, value: Any) -> bool:
        """Return False for values that mean "no constraint"."""

        if _is_blank(value):
            return False
        if self.kind == CATEGORY and value == ALL_CATEGORIES:
            return False
        return True

    def check(self, value: Any) -> None:
        """Raise ``ValueError`` if ``value`` cannot constrain this field."""

        try:
            if self.kind == MIN_AMOUNT:
                float(value)
            elif self.kind == ON_DATE:
                _as_date(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid {self.kind} filter value: {value!r}") from exc

    def matches(self, record: Any, value: Any) -> bool:
        candidate = self.accessor(record)
        if self.kind == TEXT:
            return str(value).casefold() in (candidate or "").casefold()
        if self.kind == CATEGORY:
            return candidate == value
        if self.kind == MIN_AMOUNT:
            return candidate is not None and candidate >= float(value)
        # ON_DATE
        return candidate is not None and _as_date(candidate) == _as_date(value)


@dataclass(frozen=True)
class FilterState:
    """Active filter values keyed by filter-field name.

    Only constraining values are stored; an absent key means "match all".
    """

    values: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def with_value(self, name: str, value: Any, *, active: bool) -> "FilterState":
        updated = dict(self.values)
        if active:
            updated[name] = value
        else:
            updated.pop(name, None)
        return FilterState(updated)


@dataclass(frozen=True)
class SortState:
    field: str
    direction: str = ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction == DESCENDING


@dataclass(frozen=True)
class PageState:
    size: int
    current: int = 1


@dataclass(frozen=True)
class ListPage(Generic[RecordT]):
    """What a screen renders: one page of rows plus pager metadata."""

    records: tuple[RecordT, ...]
    total: int
    page: int
    page_size: int
    last_page: int
    error: Optional[str] = None

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < self.total

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def ids(self) -> list[RecordId]:
        return [record.id for record in self.records]


@dataclass(frozen=True)
class ListResult:
    """Outcome of an operation that talks to the repository."""

    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "ListResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str) -> "ListResult":
        return cls(ok=False, error=message)


@dataclass(frozen=True)
class ListViewConfig:
    """Per-screen wiring: which fields filter, which sort, and the page size."""

    name: str
    filter_fields: Mapping[str, FilterField]
    sort_fields: Mapping[str, Accessor]
    default_sort: str
    default_direction: str = ASCENDING
    page_size: int = 5

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")
        if self.default_sort not in self.sort_fields:
            raise ValueError(f"default_sort {self.default_sort!r} is not a sortable field")
        if self.default_direction not in DIRECTIONS:
            raise ValueError(f"Unknown sort direction: {self.default_direction}")


def use_system_collation() -> bool:
    """Collate strings with the user's locale instead of code point order.

    Python starts with the "C" collation, under which ``strxfrm`` sorts
    "Émile" after "Zebra". Returns False when the locale is unusable.
    """

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.warning("System collation unavailable", extra={"error": str(exc)})
        return False
    logger.info("Collation set", extra={"locale": locale.setlocale(locale.LC_COLLATE)})
    return True


def _compare(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def compare_values(left: Any, right: Any) -> int:
    """Three-way compare; strings are compared locale-aware and case-insensitively first."""

    if isinstance(left, str) and isinstance(right, str):
        primary = _compare(locale.strxfrm(left.casefold()), locale.strxfrm(right.casefold()))
        if primary:
            return primary
        return _compare(locale.strxfrm(left), locale.strxfrm(right))
    return _compare(left, right)


def sort_key(accessor: Accessor, direction: str):
    """Build a ``sorted`` key for one field.

    Descending negates the comparison instead of reversing the output, so rows
    with equal keys keep their incoming order in both directions. ``None`` keys
    always go last.
    """

    sign = -1 if direction == DESCENDING else 1

    def compare(left: Any, right: Any) -> int:
        a, b = accessor(left), accessor(right)
        if a is None or b is None:
            return (a is None) - (b is None)
        return sign * compare_values(a, b)

    return cmp_to_key(compare)


def last_page_for(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


class ListViewController(Generic[RecordT]):
    """Filter/sort/paginate state for one list screen.

    One instance per screen; not shared between screens or threads. Every
    public operation recomputes :attr:`view` before returning.
    """

    def __init__(self, config: ListViewConfig, repository: RecordRepository[RecordT]):
        self.config = config
        self.repository = repository
        self._authoritative: tuple[RecordT, ...] = ()
        self._categories: tuple[Category, ...] = ()
        self._filter = FilterState()
        self._sort = SortState(config.default_sort, config.default_direction)
        self._page = PageState(size=config.page_size)
        self.last_error: Optional[str] = None
        self._ordered, self._page, self._view = self._derive(
            self._authoritative, self._filter, self._sort, self._page, None
        )

    # ------------------------------------------------------------------ state

    @property
    def records(self) -> tuple[RecordT, ...]:
        """The authoritative collection, in server order."""
        return self._authoritative

    @property
    def filtered_records(self) -> tuple[RecordT, ...]:
        """Every row passing the filters, in display order (all pages)."""
        return self._ordered

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def filter(self) -> FilterState:
        return self._filter

    @property
    def sort(self) -> SortState:
        return self._sort

    @property
    def page(self) -> PageState:
        return self._page

    @property
    def view(self) -> ListPage[RecordT]:
        return self._view

    # ------------------------------------------------------------------ fetch

    def ingest(self, records: Iterable[RecordT]) -> ListPage[RecordT]:
        """Replace the collection wholesale and go back to page 1."""

        incoming = tuple(records)
        view = self._apply(
            authoritative=incoming,
            page=replace(self._page, current=1),
            error=None,
        )
        logger.info(
            "Records ingested",
            extra={"screen": self.config.name, "count": len(incoming)},
        )
        return view

    def refresh(self) -> ListResult:
        """Fetch the full collection; on failure keep the last good one."""

        try:
            records = self.repository.list_all()
        except ServiceError as exc:
            logger.warning(
                "Fetch failed",
                extra={"screen": self.config.name, "error": exc.message, "status": exc.status_code},
            )
            self._apply(error=exc.message)
            return ListResult.failure(exc.message)
        self.ingest(records)
        return ListResult.success()

    def load_categories(self) -> ListResult:
        """Fetch the category snapshot used by the category filter."""

        try:
            categories = self.repository.list_categories()
        except ServiceError as exc:
            logger.warning(
                "Category fetch failed",
                extra={"screen": self.config.name, "error": exc.message},
            )
            self._apply(error=exc.message)
            return ListResult.failure(exc.message)
        self._categories = tuple(categories)
        return ListResult.success()

    def category_by_id(self, category_id: Any) -> Optional[Category]:
        """Resolve a category from the snapshot; ids compare as strings (dropdown keys)."""

        if _is_blank(category_id):
            return None
        wanted = str(category_id)
        for category in self._categories:
            if str(category.id) == wanted:
                return category
        return None

    # ------------------------------------------------------------------ filter / sort / page

    def set_filter(self, name: str, value: Any) -> ListPage[RecordT]:
        """Set one filter value and return to page 1.

        Values the field cannot interpret (a malformed date, a non-numeric
        minimum) raise ``ValueError`` and leave the controller untouched.
        """

        try:
            filter_field = self.config.filter_fields[name]
        except KeyError:
            raise KeyError(f"Unknown filter field for {self.config.name}: {name}") from None
        active = filter_field.is_active(value)
        if active:
            filter_field.check(value)
        return self._apply(
            filter=self._filter.with_value(name, value, active=active),
            page=replace(self._page, current=1),
        )

    def clear_filters(self) -> ListPage[RecordT]:
        return self._apply(filter=FilterState(), page=replace(self._page, current=1))

    def set_sort(self, name: str, direction: Optional[str] = None) -> ListPage[RecordT]:
        """Sort the filtered rows by ``name``; the current page is kept."""

        if name not in self.config.sort_fields:
            raise KeyError(f"Unknown sort field for {self.config.name}: {name}")
        direction = direction or self._sort.direction
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown sort direction: {direction}")
        return self._apply(sort=SortState(name, direction))

    def toggle_direction(self) -> ListPage[RecordT]:
        flipped = ASCENDING if self._sort.descending else DESCENDING
        return self.set_sort(self._sort.field, flipped)

    def set_page(self, number: int) -> ListPage[RecordT]:
        """Jump to a page; out-of-range numbers are clamped, never rejected."""

        last = last_page_for(len(self._ordered), self._page.size)
        return self._apply(page=replace(self._page, current=min(max(1, int(number)), last)))

    def next_page(self) -> ListPage[RecordT]:
        return self.set_page(self._page.current + 1)

    def previous_page(self) -> ListPage[RecordT]:
        return self.set_page(self._page.current - 1)

    # ------------------------------------------------------------------ delete

    def delete_record(self, record_id: RecordId) -> ListResult:
        """Delete remotely, then drop the row locally and re-clamp the page."""

        try:
            self.repository.delete(record_id)
        except ServiceError as exc:
            logger.warning(
                "Delete failed",
                extra={
                    "screen": self.config.name,
                    "record_id": record_id,
                    "error": exc.message,
                    "status": exc.status_code,
                },
            )
            self._apply(error=exc.message)
            return ListResult.failure(exc.message)

        self._apply(
            authoritative=tuple(r for r in self._authoritative if r.id != record_id),
            error=None,
        )
        logger.info("Record deleted", extra={"screen": self.config.name, "record_id": record_id})
        return ListResult.success()

    # ------------------------------------------------------------------ derivation

    def _apply(
        self,
        *,
        authoritative: Optional[tuple[RecordT, ...]] = None,
        filter: Optional[FilterState] = None,
        sort: Optional[SortState] = None,
        page: Optional[PageState] = None,
        error: Any = _UNCHANGED,
    ) -> ListPage[RecordT]:
        """Derive the view from candidate state; commit only if derivation succeeds."""

        authoritative = self._authoritative if authoritative is None else authoritative
        filter = self._filter if filter is None else filter
        sort = self._sort if sort is None else sort
        page = self._page if page is None else page
        error = self.last_error if error is _UNCHANGED else error

        ordered, page, view = self._derive(authoritative, filter, sort, page, error)

        self._authoritative = authoritative
        self._filter = filter
        self._sort = sort
        self._page = page
        self._ordered = ordered
        self.last_error = error
        self._view = view
        return view

    def _derive(
        self,
        authoritative: tuple[RecordT, ...],
        filter: FilterState,
        sort: SortState,
        page: PageState,
        error: Optional[str],
    ) -> tuple[tuple[RecordT, ...], PageState, ListPage[RecordT]]:
        fields = self.config.filter_fields
        filtered = [
            record
            for record in authoritative
            if all(fields[name].matches(record, value) for name, value in filter.values.items())
        ]
        accessor = self.config.sort_fields[sort.field]
        ordered = tuple(sorted(filtered, key=sort_key(accessor, sort.direction)))

        size = page.size
        last = last_page_for(len(ordered), size)
        if page.current > last:
            page = replace(page, current=last)
        current = page.current
        view = ListPage(
            records=ordered[(current - 1) * size : current * size],
            total=len(ordered),
            page=current,
            page_size=size,
            last_page=last,
            error=error,
        )
        return ordered, page, view
