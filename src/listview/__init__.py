"""listview: render paginated, sortable collections as markup.

A list view reads records, counts, pagination and sort state from a data
source and renders them through a layout of section tokens:

- {summary}: "Showing 6-10 of 50 items."
- {items}: the records of the current page
- {sorter}: sort links
- {pager}: page links

Usage:
    from listview import ListView, ArrayDataSource, PaginationState

    source = ArrayDataSource(rows, pagination=PaginationState(page_size=10))
    html = ListView(source, item_view="{name}").render()
"""

from .data import (
    ArrayDataSource,
    DataSource,
    PaginationState,
    SortDirection,
    SortState,
)
from .errors import ConfigurationError, ListViewError
from .l10n import Localizer, MessageLocalizer
from .layout import SectionKind, find_tokens, render_layout
from .summary import SummaryValues, compute_summary_values, render_summary
from .view import BaseListView, ListView
from .widgets import LinkPager, LinkSorter, Pager, Sorter

__version__ = "0.1.0"

__all__ = [
    # View
    "BaseListView",
    "ListView",
    # Data
    "ArrayDataSource",
    "DataSource",
    "PaginationState",
    "SortDirection",
    "SortState",
    # Sections
    "SectionKind",
    "find_tokens",
    "render_layout",
    "SummaryValues",
    "compute_summary_values",
    "render_summary",
    # Widgets
    "LinkPager",
    "LinkSorter",
    "Pager",
    "Sorter",
    # Localization
    "Localizer",
    "MessageLocalizer",
    # Errors
    "ConfigurationError",
    "ListViewError",
]
