"""Data side of a list view: pagination, sorting and data sources.

The list view never fetches records itself. It reads counts, pagination
and sort state from a DataSource:

- PaginationState: which page is shown and how many pages exist
- SortState: sortable attributes and the orders currently applied
- DataSource: protocol the list view consumes
- ArrayDataSource: in-memory DataSource over a sequence of models

Pages are 0-based internally and 1-based in URLs.
"""

import math
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Protocol, Sequence, Union
from urllib.parse import urlencode

DEFAULT_PAGE_SIZE = 20


class SortDirection(Enum):
    """Direction of a sort order."""

    ASC = "asc"
    DESC = "desc"

    def reversed(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


def _build_url(base_url: str, params: dict[str, Any]) -> str:
    """Join a base URL and query parameters, dropping None values."""
    query = urlencode({k: v for k, v in params.items() if v is not None})
    if query:
        return f"{base_url}?{query}"
    return base_url or "?"


class PaginationState:
    """Pagination of a result set.

    Attributes:
        page_size: Records per page.
        total_count: Records across all pages (set by the data source).
        validate_page: Clamp the requested page into the valid range.
        page_param: Query parameter carrying the 1-based page number.
        page_size_param: Query parameter carrying a non-default page size.
        base_url: URL that page links are built on.
        params: Extra query parameters kept in page links.
    """

    def __init__(
        self,
        page: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        total_count: int = 0,
        *,
        validate_page: bool = True,
        page_param: str = "page",
        page_size_param: str = "per-page",
        base_url: str = "",
        params: Optional[dict[str, Any]] = None,
    ):
        self._page = page
        self.page_size = page_size
        self.total_count = total_count
        self.validate_page = validate_page
        self.page_param = page_param
        self.page_size_param = page_size_param
        self.base_url = base_url
        self.params = dict(params or {})

    def __repr__(self) -> str:
        return (
            f"PaginationState(page={self.page}, page_size={self.page_size}, "
            f"total_count={self.total_count})"
        )

    @property
    def page_count(self) -> int:
        """Number of pages for the current total count."""
        if self.page_size < 1:
            return 1 if self.total_count > 0 else 0
        return math.ceil(max(self.total_count, 0) / self.page_size)

    @property
    def page(self) -> int:
        """Current page (0-based), clamped when validate_page is set."""
        if self.validate_page:
            return max(0, min(self._page, self.page_count - 1))
        return self._page

    @page.setter
    def page(self, value: int) -> None:
        self._page = value

    @property
    def offset(self) -> int:
        """Index of the first record on the current page."""
        return self.page * self.page_size if self.page_size > 0 else 0

    @property
    def limit(self) -> Optional[int]:
        """Records per page, or None when paging is disabled."""
        return self.page_size if self.page_size > 0 else None

    def create_url(self, page: int, page_size: Optional[int] = None) -> str:
        """Build the URL for a page.

        Args:
            page: Target page (0-based).
            page_size: Page size to request (default: the current one).

        Returns:
            URL whose page parameter is 1-based; the first page omits it.
        """
        if page_size is None:
            page_size = self.page_size
        params = dict(self.params)
        params[self.page_param] = page + 1 if page > 0 else None
        if page_size != DEFAULT_PAGE_SIZE:
            params[self.page_size_param] = page_size
        else:
            params.pop(self.page_size_param, None)
        return _build_url(self.base_url, params)


class SortState:
    """Sortable attributes and the orders currently applied.

    Each attribute definition holds:
        asc: Mapping of column -> SortDirection applied for ascending sort.
        desc: Mapping of column -> SortDirection applied for descending sort.
        default: Direction used when a link first activates the attribute.
        label: Text shown by sorters.

    Attributes may be given as a list of names or as a dict of partial
    definitions; missing keys are filled in from the attribute name.
    """

    def __init__(
        self,
        attributes: Union[Iterable[str], dict[str, dict], None] = None,
        orders: Optional[dict[str, SortDirection]] = None,
        *,
        default_order: Optional[dict[str, SortDirection]] = None,
        enable_multi_sort: bool = False,
        sort_param: str = "sort",
        separator: str = ",",
        base_url: str = "",
        params: Optional[dict[str, Any]] = None,
    ):
        self.attributes = self._normalize_attributes(attributes or {})
        self.default_order = dict(default_order or {})
        self.enable_multi_sort = enable_multi_sort
        self.sort_param = sort_param
        self.separator = separator
        self.base_url = base_url
        self.params = dict(params or {})
        self._orders: Optional[dict[str, SortDirection]] = None
        if orders is not None:
            self.orders = orders

    def __repr__(self) -> str:
        return f"SortState(attributes={list(self.attributes)}, orders={self.orders})"

    @staticmethod
    def _normalize_attributes(attributes) -> dict[str, dict]:
        if not isinstance(attributes, dict):
            attributes = {name: {} for name in attributes}

        normalized = {}
        for name, definition in attributes.items():
            definition = dict(definition or {})
            definition.setdefault("asc", {name: SortDirection.ASC})
            definition.setdefault("desc", {name: SortDirection.DESC})
            definition.setdefault("default", SortDirection.ASC)
            definition.setdefault("label", name.replace("_", " ").title())
            normalized[name] = definition
        return normalized

    @classmethod
    def from_param(cls, attributes, value: Optional[str], **kwargs) -> "SortState":
        """Create a sort state from a request parameter like "-name,age"."""
        state = cls(attributes, **kwargs)
        if value:
            state.orders = state.parse_param(value)
        return state

    def parse_param(self, value: str) -> dict[str, SortDirection]:
        """Parse a sort parameter into attribute orders.

        A leading "-" selects descending order. Unknown attributes are
        ignored; without multi-sort only the first known one is kept.
        """
        orders: dict[str, SortDirection] = {}
        for part in value.split(self.separator):
            part = part.strip()
            if not part:
                continue
            direction = SortDirection.ASC
            if part.startswith("-"):
                direction = SortDirection.DESC
                part = part[1:]
            if part in self.attributes and part not in orders:
                orders[part] = direction
                if not self.enable_multi_sort:
                    break
        return orders

    @property
    def orders(self) -> dict[str, SortDirection]:
        """Attribute orders in effect (the default order when none is set)."""
        if self._orders is None:
            return dict(self.default_order)
        return dict(self._orders)

    @orders.setter
    def orders(self, value: dict[str, SortDirection]) -> None:
        self._orders = {
            name: SortDirection(direction)
            for name, direction in value.items()
            if name in self.attributes
        }

    def get_column_orders(self) -> dict[str, SortDirection]:
        """Expand attribute orders into column orders."""
        columns: dict[str, SortDirection] = {}
        for name, direction in self.orders.items():
            definition = self.attributes[name]
            key = "asc" if direction is SortDirection.ASC else "desc"
            for column, column_direction in definition[key].items():
                columns.setdefault(column, SortDirection(column_direction))
        return columns

    def get_attribute_order(self, attribute: str) -> Optional[SortDirection]:
        return self.orders.get(attribute)

    def create_sort_param(self, attribute: str) -> str:
        """Build the sort parameter a link for the attribute should carry.

        The attribute's direction is toggled if it is active, otherwise its
        default direction is used. It always becomes the primary order.
        """
        if attribute not in self.attributes:
            raise KeyError(f"Unknown sort attribute: {attribute}")

        current = self.orders
        if attribute in current:
            direction = current.pop(attribute).reversed()
        else:
            direction = SortDirection(self.attributes[attribute]["default"])

        directions = {attribute: direction}
        if self.enable_multi_sort:
            directions.update(current)

        return self.separator.join(
            name if d is SortDirection.ASC else f"-{name}"
            for name, d in directions.items()
        )

    def create_url(self, attribute: str) -> str:
        params = dict(self.params)
        params[self.sort_param] = self.create_sort_param(attribute)
        return _build_url(self.base_url, params)

    def link_label(self, attribute: str) -> str:
        return self.attributes[attribute]["label"]


class DataSource(Protocol):
    """What a list view needs from the provider of its records."""

    def prepare(self) -> Any:
        """Fetch the records for the current page (may return an awaitable)."""
        ...

    def count(self) -> int:
        """Number of records on the current page."""
        ...

    def total_count(self) -> int:
        """Number of records across all pages."""
        ...

    def pagination(self) -> Optional[PaginationState]:
        ...

    def sort(self) -> Optional[SortState]:
        ...


KeySpec = Union[str, Callable[[Any], Any], None]


def _value(model: Any, name: str) -> Any:
    if isinstance(model, dict):
        return model.get(name)
    return getattr(model, name, None)


def _sort_key(value: Any) -> tuple:
    """Order numbers, then strings, then other values grouped by type.

    None sorts last in ascending order. Values of different types are
    never compared with each other.
    """
    if value is None:
        return (3, "", 0)
    if isinstance(value, (int, float)):
        return (0, "", value)
    if isinstance(value, str):
        return (1, "", value)
    return (2, type(value).__name__, value)


class ArrayDataSource:
    """DataSource over an in-memory sequence of models.

    Models may be dicts or objects. prepare() sorts by the current sort
    orders, records the total on the pagination state, then slices out the
    current page. It runs once; pass force=True to prepare again.
    """

    def __init__(
        self,
        models: Sequence[Any],
        *,
        pagination: Optional[PaginationState] = None,
        sort: Optional[SortState] = None,
        key: KeySpec = None,
    ):
        self.all_models = list(models)
        self._pagination = pagination
        self._sort = sort
        self.key = key
        self._models: list[Any] = []
        self._keys: list[Any] = []
        self._prepared = False

    def prepare(self, force: bool = False) -> None:
        if self._prepared and not force:
            return

        indexed = self._sort_models(list(enumerate(self.all_models)))
        models = [model for _, model in indexed]
        keys = self._keys_for(indexed)

        if self._pagination is not None:
            self._pagination.total_count = len(models)
            offset = self._pagination.offset
            limit = self._pagination.limit
            end = None if limit is None else offset + limit
            models = models[offset:end]
            keys = keys[offset:end]

        self._models = models
        self._keys = keys
        self._prepared = True

    def _sort_models(self, indexed: list[tuple[int, Any]]) -> list[tuple[int, Any]]:
        if self._sort is None:
            return indexed

        # Stable sort applied from the least significant column up
        for column, direction in reversed(list(self._sort.get_column_orders().items())):
            indexed.sort(
                key=lambda pair, c=column: _sort_key(_value(pair[1], c)),
                reverse=direction is SortDirection.DESC,
            )
        return indexed

    def _keys_for(self, indexed: list[tuple[int, Any]]) -> list[Any]:
        if self.key is None:
            return [index for index, _ in indexed]
        if callable(self.key):
            return [self.key(model) for _, model in indexed]
        return [_value(model, self.key) for _, model in indexed]

    def models(self) -> list[Any]:
        self.prepare()
        return list(self._models)

    def keys(self) -> list[Any]:
        self.prepare()
        return list(self._keys)

    def count(self) -> int:
        self.prepare()
        return len(self._models)

    def total_count(self) -> int:
        return len(self.all_models)

    def pagination(self) -> Optional[PaginationState]:
        return self._pagination

    def sort(self) -> Optional[SortState]:
        return self._sort
