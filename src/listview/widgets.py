"""Pager and sorter widgets.

A list view talks to its pager and sorter only through render(config).
The live state is injected into config before each call:

- config["pagination"]: PaginationState, for pagers
- config["sort"]: SortState, for sorters

Any other config keys are the widget's own options. LinkPager and
LinkSorter are the defaults; any object with a render(config) method can
replace them.
"""

from typing import Any, Optional, Protocol

from .data import PaginationState, SortDirection, SortState
from .html import encode, tag


class Pager(Protocol):
    def render(self, config: dict[str, Any]) -> str:
        ...


class Sorter(Protocol):
    def render(self, config: dict[str, Any]) -> str:
        ...


class _ConfigurableWidget:
    """Widget whose constructor keywords act as config defaults."""

    DEFAULTS: dict[str, Any] = {}

    def __init__(self, **defaults: Any):
        unknown = set(defaults) - set(self.DEFAULTS)
        if unknown:
            raise TypeError(
                f"{type(self).__name__} got unknown options: {sorted(unknown)}"
            )
        self.defaults = dict(defaults)

    def _options(self, config: dict[str, Any]) -> dict[str, Any]:
        options = dict(self.DEFAULTS)
        options.update(self.defaults)
        options.update(config)
        return options


class LinkPager(_ConfigurableWidget):
    """Renders page links as a list.

    Options:
        options: Attributes of the <ul> container.
        link_options: Attributes of each <a> link.
        page_css_class: Class of internal page buttons.
        first_page_css_class, last_page_css_class,
        prev_page_css_class, next_page_css_class: Classes of the nav buttons.
        active_page_css_class: Class of the current page button.
        disabled_page_css_class: Class of buttons that cannot be used.
        max_button_count: Most internal page buttons shown.
        next_page_label, prev_page_label: Labels; None hides the button.
        first_page_label, last_page_label: Labels; None (default) hides them.
        hide_on_single_page: Render nothing when there are fewer than 2 pages.
    """

    DEFAULTS = {
        "options": {"class": "pagination"},
        "link_options": {},
        "page_css_class": None,
        "first_page_css_class": "first",
        "last_page_css_class": "last",
        "prev_page_css_class": "prev",
        "next_page_css_class": "next",
        "active_page_css_class": "active",
        "disabled_page_css_class": "disabled",
        "max_button_count": 10,
        "next_page_label": "&raquo;",
        "prev_page_label": "&laquo;",
        "first_page_label": None,
        "last_page_label": None,
        "hide_on_single_page": True,
    }

    def render(self, config: dict[str, Any]) -> str:
        options = self._options(config)
        pagination: Optional[PaginationState] = options.get("pagination")
        if pagination is None:
            raise ValueError('LinkPager requires the "pagination" option')

        page_count = pagination.page_count
        if page_count < 2 and options["hide_on_single_page"]:
            return ""

        current = pagination.page
        last = page_count - 1
        buttons = []

        if options["first_page_label"] is not None:
            buttons.append(self._button(
                options, pagination, options["first_page_label"], 0,
                options["first_page_css_class"], current <= 0, False,
            ))

        if options["prev_page_label"] is not None:
            buttons.append(self._button(
                options, pagination, options["prev_page_label"], max(current - 1, 0),
                options["prev_page_css_class"], current <= 0, False,
            ))

        begin, end = self.page_range(current, page_count, options["max_button_count"])
        for page in range(begin, end + 1):
            buttons.append(self._button(
                options, pagination, str(page + 1), page,
                options["page_css_class"], False, page == current,
            ))

        if options["next_page_label"] is not None:
            buttons.append(self._button(
                options, pagination, options["next_page_label"], min(current + 1, last),
                options["next_page_css_class"], current >= last, False,
            ))

        if options["last_page_label"] is not None:
            buttons.append(self._button(
                options, pagination, options["last_page_label"], last,
                options["last_page_css_class"], current >= last, False,
            ))

        return tag("ul", "\n".join(buttons), options["options"])

    @staticmethod
    def page_range(current: int, page_count: int, max_buttons: int) -> tuple[int, int]:
        """First and last page (0-based, inclusive) of the internal buttons."""
        begin = max(0, current - max_buttons // 2)
        end = begin + max_buttons - 1
        if end >= page_count:
            end = page_count - 1
            begin = max(0, end - max_buttons + 1)
        return begin, end

    @staticmethod
    def _button(
        options: dict[str, Any],
        pagination: PaginationState,
        label: str,
        page: int,
        css_class: Optional[str],
        disabled: bool,
        active: bool,
    ) -> str:
        classes = [css_class] if css_class else []
        if active:
            classes.append(options["active_page_css_class"])
        if disabled:
            classes.append(options["disabled_page_css_class"])
        item_options = {"class": classes or None}

        if disabled:
            return tag("li", tag("span", label), item_options)

        link_options = dict(options["link_options"])
        link_options["href"] = pagination.create_url(page)
        link_options["data"] = {**link_options.get("data", {}), "page": page}
        return tag("li", tag("a", label, link_options), item_options)


class LinkSorter(_ConfigurableWidget):
    """Renders one sort link per sortable attribute.

    Options:
        attributes: Attributes to link (default: all sortable ones).
        options: Attributes of the <ul> container.
        link_options: Attributes of each <a> link.
    """

    DEFAULTS = {
        "attributes": None,
        "options": {"class": "sorter"},
        "link_options": {},
    }

    def render(self, config: dict[str, Any]) -> str:
        options = self._options(config)
        sort: Optional[SortState] = options.get("sort")
        if sort is None:
            raise ValueError('LinkSorter requires the "sort" option')

        attributes = options["attributes"] or list(sort.attributes)
        links = [
            tag("li", self.link(sort, name, options["link_options"]))
            for name in attributes
        ]
        return tag("ul", "\n".join(links), options["options"])

    @staticmethod
    def link(sort: SortState, attribute: str, link_options: dict[str, Any]) -> str:
        """Sort link for one attribute, classed by its active direction."""
        link_options = dict(link_options)
        direction = sort.get_attribute_order(attribute)
        if direction is not None:
            css = "desc" if direction is SortDirection.DESC else "asc"
            existing = link_options.get("class")
            link_options["class"] = f"{existing} {css}" if existing else css
        link_options["href"] = sort.create_url(attribute)
        link_options["data"] = {
            **link_options.get("data", {}),
            "sort": sort.create_sort_param(attribute),
        }
        return tag("a", encode(sort.link_label(attribute)), link_options)
