"""Tests for the list view orchestrator."""

import pytest

from listview.data import ArrayDataSource, PaginationState, SortDirection, SortState
from listview.errors import (
    CONFIG_INVALID,
    DATA_SOURCE_MISSING,
    ITEM_VIEW_MISSING,
    WIDGET_INVALID,
    ConfigurationError,
)
from listview.l10n import MessageLocalizer
from listview.view import BaseListView, ListView


class FakeDataSource:
    """Data source with fixed counts that records calls."""

    def __init__(self, count=0, total=None, pagination=None, sort=None):
        self._count = count
        self._total = count if total is None else total
        self._pagination = pagination
        self._sort = sort
        self.prepare_calls = 0

    def prepare(self):
        self.prepare_calls += 1

    def count(self):
        return self._count

    def total_count(self):
        return self._total

    def pagination(self):
        return self._pagination

    def sort(self):
        return self._sort

    def models(self):
        return [{"name": f"m{i}"} for i in range(self._count)]


class SpyWidget:
    """Pager/sorter that records the configs it is rendered with."""

    def __init__(self, output="W"):
        self.output = output
        self.configs = []

    def render(self, config):
        self.configs.append(dict(config))
        return self.output


class StaticListView(BaseListView):
    def render_items(self):
        return "ITEMS"


def make_rows(n: int) -> list[dict]:
    return [{"name": f"r{i}"} for i in range(n)]


class TestConstruction:
    """Tests for list view set-up."""

    def test_missing_data_source(self):
        with pytest.raises(ConfigurationError) as exc:
            StaticListView(None)
        assert exc.value.code == DATA_SOURCE_MISSING

    def test_missing_item_view(self):
        with pytest.raises(ConfigurationError) as exc:
            ListView(FakeDataSource())
        assert exc.value.code == ITEM_VIEW_MISSING

    def test_missing_data_source_reported_before_item_view(self):
        with pytest.raises(ConfigurationError) as exc:
            ListView(None)
        assert exc.value.code == DATA_SOURCE_MISSING

    def test_empty_true_rejected(self):
        """True is not a message; only None, a string or False are accepted."""
        with pytest.raises(ConfigurationError) as exc:
            StaticListView(FakeDataSource(), empty=True)
        assert exc.value.code == CONFIG_INVALID
        assert exc.value.error.details["path"] == "empty"

    def test_render_items_required(self):
        """BaseListView cannot be used without an item strategy."""
        with pytest.raises(TypeError):
            BaseListView(FakeDataSource())

    def test_prepares_once(self):
        source = FakeDataSource(count=2)
        view = StaticListView(source)
        view.render()
        view.render()

        assert source.prepare_calls == 1

    def test_invalid_widget(self):
        with pytest.raises(ConfigurationError) as exc:
            StaticListView(FakeDataSource(), pager={"widget": object()})
        assert exc.value.code == WIDGET_INVALID

    def test_caller_config_not_mutated(self):
        pager = {"widget": SpyWidget(), "max_button_count": 3}
        options = {"tag": "ul", "class": "list"}
        view = StaticListView(
            FakeDataSource(count=1, pagination=PaginationState(total_count=1)),
            pager=pager,
            options=options,
            layout="{pager}",
        )
        view.render()

        assert pager == {"widget": pager["widget"], "max_button_count": 3}
        assert options == {"tag": "ul", "class": "list"}


class TestRender:
    """Tests for the render state machine."""

    def test_empty_default_message(self):
        view = StaticListView(FakeDataSource(count=0))
        assert view.render() == '<div><div class="empty">No results found.</div></div>'

    def test_empty_custom_message(self):
        view = StaticListView(FakeDataSource(count=0), empty="Nothing here")
        assert view.render() == '<div><div class="empty">Nothing here</div></div>'

    def test_empty_localized(self):
        localizer = MessageLocalizer(
            catalogs={"es": {"No results found.": "Sin resultados."}}
        )
        view = StaticListView(FakeDataSource(), localizer=localizer, language="es")
        assert "Sin resultados." in view.render()

    def test_empty_options(self):
        view = StaticListView(
            FakeDataSource(), empty_options={"tag": "p", "class": "none"}
        )
        assert view.render() == '<div><p class="none">No results found.</p></div>'

    def test_empty_false_renders_layout(self):
        """empty=False keeps the layout even without records."""
        view = StaticListView(FakeDataSource(count=0), empty=False)
        assert view.render() == (
            '<div><div class="summary">Total <b>0</b> items.</div>\nITEMS\n</div>'
        )

    def test_layout_rendered_with_records(self):
        view = StaticListView(FakeDataSource(count=3), layout="{items}")
        assert view.render() == "<div>ITEMS</div>"

    def test_unknown_token_preserved(self):
        view = StaticListView(FakeDataSource(count=3), layout="{items}|{foo}")
        assert view.render() == "<div>ITEMS|{foo}</div>"

    def test_container_options(self):
        view = StaticListView(
            FakeDataSource(count=1),
            options={"tag": "section", "class": "list-view", "id": "w0"},
            layout="{items}",
        )
        assert view.render() == '<section class="list-view" id="w0">ITEMS</section>'

    def test_str_renders(self):
        view = StaticListView(FakeDataSource(count=1), layout="{items}")
        assert str(view) == view.render()

    def test_collaborator_errors_propagate(self):
        class Broken(BaseListView):
            def render_items(self):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            Broken(FakeDataSource(count=1)).render()


class TestSections:
    """Tests for section dispatch and the pager/sorter guards."""

    def test_render_section_unknown(self):
        view = StaticListView(FakeDataSource(count=1))
        assert view.render_section("{foo}") is None
        assert view.render_section("{items}") == "ITEMS"

    def test_pager_receives_live_pagination(self):
        pagination = PaginationState(page_size=5, total_count=50)
        widget = SpyWidget("PAGER")
        view = StaticListView(
            FakeDataSource(count=5, total=50, pagination=pagination),
            pager={"widget": widget, "max_button_count": 3},
            layout="{pager}",
        )

        assert view.render() == "<div>PAGER</div>"
        assert widget.configs == [{"max_button_count": 3, "pagination": pagination}]

    def test_sorter_receives_live_sort(self):
        sort = SortState(["name"])
        widget = SpyWidget("SORTER")
        view = StaticListView(
            FakeDataSource(count=2, sort=sort),
            sorter={"widget": widget},
            layout="{sorter}",
        )

        assert view.render() == "<div>SORTER</div>"
        assert widget.configs[0]["sort"] is sort

    def test_pager_skipped_without_pagination(self):
        widget = SpyWidget()
        view = StaticListView(FakeDataSource(count=2), pager={"widget": widget})

        assert view.render_pager() == ""
        assert widget.configs == []

    def test_sorter_skipped_without_attributes(self):
        widget = SpyWidget()
        view = StaticListView(
            FakeDataSource(count=2, sort=SortState([])), sorter={"widget": widget}
        )

        assert view.render_sorter() == ""
        assert widget.configs == []

    def test_pager_and_sorter_skipped_without_records(self):
        """No pager or sorter for an empty page, whatever the state."""
        pager, sorter = SpyWidget(), SpyWidget()
        view = StaticListView(
            FakeDataSource(
                count=0,
                pagination=PaginationState(total_count=100),
                sort=SortState(["name"]),
            ),
            pager={"widget": pager},
            sorter={"widget": sorter},
            empty=False,
            layout="{sorter}|{pager}",
        )

        assert view.render() == "<div>|</div>"
        assert pager.configs == []
        assert sorter.configs == []

    def test_paged_summary(self):
        pagination = PaginationState(page=1, page_size=5, total_count=50)
        view = StaticListView(
            FakeDataSource(count=5, total=50, pagination=pagination),
            layout="{summary}",
        )

        assert view.render() == (
            '<div><div class="summary">Showing <b>6-10</b> of <b>50</b> items.</div></div>'
        )
        assert view.summary_values().begin == 6

    def test_summary_template(self):
        view = StaticListView(
            FakeDataSource(count=4), summary="{count} rows", layout="{summary}"
        )
        assert view.render() == "<div>4 rows</div>"


class TestListView:
    """Tests for ListView item rendering."""

    def test_full_page(self):
        pagination = PaginationState(page=1, page_size=5)
        source = ArrayDataSource(make_rows(12), pagination=pagination)
        view = ListView(
            source,
            item_view="{name}",
            item_options={"tag": None},
            separator=",",
            layout="{summary}\n{items}",
        )

        assert view.render() == (
            '<div><div class="summary">Showing <b>6-10</b> of <b>12</b> items.</div>\n'
            "r5,r6,r7,r8,r9</div>"
        )

    def test_item_wrapped_with_key(self):
        view = ListView(ArrayDataSource(make_rows(2)), item_view="{name}", layout="{items}")
        assert view.render() == (
            '<div><div data-key="0">r0</div>\n<div data-key="1">r1</div></div>'
        )

    def test_item_options(self):
        view = ListView(
            ArrayDataSource(make_rows(1), key="name"),
            item_view="{name}",
            item_options={"tag": "li", "class": "item"},
            options={"tag": "ul"},
            layout="{items}",
        )
        assert view.render() == '<ul><li class="item" data-key="r0">r0</li></ul>'

    def test_callable_item_view(self):
        calls = []

        def item_view(model, key, index, view):
            calls.append((key, index))
            return model["name"].upper()

        sort = SortState(["name"], {"name": SortDirection.DESC})
        view = ListView(
            ArrayDataSource(make_rows(3), sort=sort),
            item_view=item_view,
            item_options={"tag": None},
            layout="{items}",
        )

        assert view.render() == "<div>R2\nR1\nR0</div>"
        assert calls == [(2, 0), (1, 1), (0, 2)]

    def test_repeated_items_token_renders_again(self):
        calls = []

        def item_view(model, key, index, view):
            calls.append(key)
            return "x"

        view = ListView(
            ArrayDataSource(make_rows(2)),
            item_view=item_view,
            item_options={"tag": None},
            layout="{items}|{items}",
        )

        assert view.render() == "<div>x\nx|x\nx</div>"
        assert calls == [0, 1, 0, 1]

    def test_object_models(self):
        class Row:
            def __init__(self, name):
                self.name = name

        view = ListView(
            ArrayDataSource([Row("a")]),
            item_view="<{name}>",
            item_options={"tag": None},
            layout="{items}",
        )
        assert view.render() == "<div><a></div>"

    def test_data_source_without_keys(self):
        """Keys default to positions when the source has no keys()."""
        view = ListView(FakeDataSource(count=2), item_view="{name}", layout="{items}")
        assert 'data-key="1">m1<' in view.render()


class TestAsyncCollaborators:
    """Awaitable collaborator results are resolved before rendering continues."""

    def test_async_prepare_and_item_view(self):
        class AsyncSource(FakeDataSource):
            async def prepare(self):
                self.prepare_calls += 1

        async def item_view(model, key, index, view):
            return model["name"]

        source = AsyncSource(count=2)
        view = ListView(
            source, item_view=item_view, item_options={"tag": None}, layout="{items}"
        )

        assert source.prepare_calls == 1
        assert view.render() == "<div>m0\nm1</div>"

    def test_async_widget(self):
        class AsyncPager:
            async def render(self, config):
                return f"page {config['pagination'].page + 1}"

        view = StaticListView(
            FakeDataSource(count=1, pagination=PaginationState(total_count=1)),
            pager={"widget": AsyncPager()},
            layout="{pager}",
        )
        assert view.render() == "<div>page 1</div>"


class TestFromConfig:
    def test_from_config_dict(self):
        view = ListView.from_config(
            {"layout": "{items}", "separator": "|", "item_options": {"tag": None}},
            ArrayDataSource(make_rows(2)),
            item_view="{name}",
        )
        assert view.render() == "<div>r0|r1</div>"

    def test_overrides_win(self):
        view = StaticListView.from_config(
            {"layout": "{summary}"}, FakeDataSource(count=1), layout="{items}"
        )
        assert view.render() == "<div>ITEMS</div>"

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError) as exc:
            StaticListView.from_config({"layout": 5}, FakeDataSource())
        assert exc.value.code == CONFIG_INVALID
