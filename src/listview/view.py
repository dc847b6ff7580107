"""List view orchestration.

BaseListView ties a DataSource to the layout engine:

1. On construction the data source is required and prepared once.
2. render() reads the visible count. With records (or when the empty
   block is suppressed with empty=False) the layout is rendered section by
   section; otherwise a single empty block is shown.
3. Either way the result is wrapped in the container element.

Subclasses implement render_items(). ListView renders each model through
an item_view callable or format template.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

from .common import (
    DEFAULT_CONTAINER_TAG,
    DEFAULT_LAYOUT,
    MESSAGE_CATEGORY,
    resolve_result,
)
from .data import DataSource
from .errors import (
    ConfigurationError,
    config_invalid,
    data_source_missing,
    item_view_missing,
    widget_invalid,
)
from .html import split_tag_options, tag
from .l10n import Localizer, MessageLocalizer
from .layout import SectionKind, render_layout
from .summary import SummaryValues, compute_summary_values, render_summary
from .widgets import LinkPager, LinkSorter

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No results found."


def _split_widget(section: str, config: Optional[dict], default) -> tuple[Any, dict]:
    """Separate the injected widget from its options."""
    config = dict(config or {})
    widget = config.pop("widget", None)
    if widget is None:
        widget = default()
    if not callable(getattr(widget, "render", None)):
        raise ConfigurationError(widget_invalid(section, widget))
    return widget, config


class BaseListView(ABC):
    """Renders a paginated, sortable collection through a layout.

    Args:
        data_source: Provider of records, counts, pagination and sort state.
        options: Container attributes; "tag" names the element (default div).
        pager: Pager options; "widget" injects a pager (default LinkPager).
        sorter: Sorter options; "widget" injects a sorter (default LinkSorter).
        summary: Summary template; None selects the localized default and
            "" hides the summary.
        empty: None shows "No results found.", a string shows that string,
            False renders the layout even when there are no records.
        empty_options: Attributes of the empty block ("tag" names it).
        layout: Layout template; tokens are {summary}, {items}, {sorter}, {pager}.
        localizer: Translator for built-in messages.
        language: Language passed to the localizer.
    """

    def __init__(
        self,
        data_source: Optional[DataSource] = None,
        *,
        options: Optional[dict[str, Any]] = None,
        pager: Optional[dict[str, Any]] = None,
        sorter: Optional[dict[str, Any]] = None,
        summary: Optional[str] = None,
        empty: Union[str, bool, None] = None,
        empty_options: Optional[dict[str, Any]] = None,
        layout: str = DEFAULT_LAYOUT,
        localizer: Optional[Localizer] = None,
        language: Optional[str] = None,
    ):
        if data_source is None:
            raise ConfigurationError(data_source_missing())
        if empty is True:
            raise ConfigurationError(
                config_invalid("empty", "must be None, a message string or False")
            )

        self.data_source = data_source
        self.options = dict(options or {})
        self.pager_widget, self.pager = _split_widget("pager", pager, LinkPager)
        self.sorter_widget, self.sorter = _split_widget("sorter", sorter, LinkSorter)
        self.summary = summary
        self.empty = empty
        self.empty_options = (
            {"class": "empty"} if empty_options is None else dict(empty_options)
        )
        self.layout = layout
        self.localizer = localizer or MessageLocalizer()
        self.language = language

        self._sections: dict[SectionKind, Callable[[], str]] = {
            SectionKind.SUMMARY: self.render_summary,
            SectionKind.ITEMS: self.render_items,
            SectionKind.SORTER: self.render_sorter,
            SectionKind.PAGER: self.render_pager,
        }

        logger.debug("Preparing data source %r", data_source)
        resolve_result(self.data_source.prepare())

    @classmethod
    def from_config(
        cls,
        config: Union[dict, str, Any],
        data_source: Optional[DataSource] = None,
        **overrides: Any,
    ) -> "BaseListView":
        """Create a list view from a validated configuration.

        Args:
            config: Configuration dict or path to a JSON file.
            data_source: Data source for the view.
            **overrides: Keyword arguments taking precedence over config.
        """
        from .config import load_config

        kwargs = load_config(config)
        kwargs.update(overrides)
        return cls(data_source, **kwargs)

    def __str__(self) -> str:
        return self.render()

    @abstractmethod
    def render_items(self) -> str:
        """Render the records of the current page."""

    def count(self) -> int:
        return self.data_source.count()

    def render(self) -> str:
        """Render the whole list view, container included."""
        count = self.count()
        if count > 0 or self.empty is False:
            logger.debug("Rendering layout for %d records", count)
            content = render_layout(self.layout, self.render_section)
        else:
            logger.debug("No records; rendering empty block")
            content = self.render_empty()

        tag_name, attributes = split_tag_options(self.options, DEFAULT_CONTAINER_TAG)
        return tag(tag_name, content, attributes)

    def render_section(self, name: str) -> Optional[str]:
        """Render the section for a layout token.

        Args:
            name: Token including braces, e.g. "{summary}".

        Returns:
            Section markup, or None if the token names no known section.
        """
        kind = SectionKind.from_token(name)
        if kind is None:
            return None
        return resolve_result(self._sections[kind]())

    def render_empty(self) -> str:
        if self.empty is None:
            message = self.localizer.translate(
                MESSAGE_CATEGORY, EMPTY_MESSAGE, None, self.language
            )
        else:
            message = str(self.empty)
        tag_name, attributes = split_tag_options(self.empty_options, "div")
        return tag(tag_name, message, attributes)

    def _summary_inputs(self):
        count = self.count()
        pagination = self.data_source.pagination()
        # The total is only consulted for paged, non-empty results
        if pagination is not None and count > 0:
            total_count = self.data_source.total_count()
        else:
            total_count = count
        return count, total_count, pagination

    def summary_values(self) -> SummaryValues:
        """Numbers behind the summary for the current page."""
        return compute_summary_values(*self._summary_inputs())

    def render_summary(self) -> str:
        count, total_count, pagination = self._summary_inputs()
        return render_summary(
            count,
            total_count,
            pagination,
            self.summary,
            self.localizer,
            self.language,
        )

    def render_pager(self) -> str:
        pagination = self.data_source.pagination()
        if pagination is None or self.count() <= 0:
            logger.debug("Skipping pager")
            return ""
        self.pager["pagination"] = pagination
        return resolve_result(self.pager_widget.render(self.pager))

    def render_sorter(self) -> str:
        sort = self.data_source.sort()
        if sort is None or not sort.attributes or self.count() <= 0:
            logger.debug("Skipping sorter")
            return ""
        self.sorter["sort"] = sort
        return resolve_result(self.sorter_widget.render(self.sorter))


ItemView = Union[str, Callable[[Any, Any, int, "ListView"], str]]


class ListView(BaseListView):
    """List view rendering each record through an item view.

    The data source must also provide models(); keys() is optional and
    defaults to positions on the page.

    Args:
        item_view: Callable (model, key, index, view) -> markup, or a
            str.format template filled from the model's fields.
        item_options: Attributes of each item element; "tag" names it
            (default div) and tag=None emits the bare item markup.
        separator: Markup placed between items.
        **kwargs: BaseListView arguments.
    """

    def __init__(
        self,
        data_source: Optional[DataSource] = None,
        *,
        item_view: Optional[ItemView] = None,
        item_options: Optional[dict[str, Any]] = None,
        separator: str = "\n",
        **kwargs: Any,
    ):
        if data_source is None:
            raise ConfigurationError(data_source_missing())
        if item_view is None:
            raise ConfigurationError(item_view_missing())
        self.item_view = item_view
        self.item_options = dict(item_options or {})
        self.separator = separator
        super().__init__(data_source, **kwargs)

    def _models_and_keys(self) -> tuple[list[Any], list[Any]]:
        models = list(self.data_source.models())
        if hasattr(self.data_source, "keys"):
            keys = list(self.data_source.keys())
        else:
            keys = list(range(len(models)))
        return models, keys

    def render_items(self) -> str:
        models, keys = self._models_and_keys()
        rows = [
            self.render_item(model, key, index)
            for index, (model, key) in enumerate(zip(models, keys))
        ]
        return self.separator.join(rows)

    def render_item(self, model: Any, key: Any, index: int) -> str:
        if isinstance(self.item_view, str):
            fields = model if isinstance(model, dict) else vars(model)
            content = self.item_view.format_map(fields)
        else:
            content = resolve_result(self.item_view(model, key, index, self))

        options = dict(self.item_options)
        tag_name = options.pop("tag", "div")
        if tag_name is None:
            return content
        if isinstance(key, (dict, list, tuple)):
            key = json.dumps(key, sort_keys=True)
        options.setdefault("data", {})
        options["data"] = {**options["data"], "key": key}
        return tag(tag_name, content, options)
