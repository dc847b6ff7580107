"""Tests for message localization and plural selection."""

import pytest

from listview.l10n import (
    MessageLocalizer,
    east_slavic_plural,
    english_plural,
    french_plural,
)

ITEMS = "{0, plural, =1{item} other{items}}"


class TestPluralRules:
    @pytest.mark.parametrize("n,expected", [(0, "other"), (1, "one"), (2, "other")])
    def test_english(self, n, expected):
        assert english_plural(n) == expected

    @pytest.mark.parametrize("n,expected", [(0, "one"), (1, "one"), (2, "other")])
    def test_french(self, n, expected):
        assert french_plural(n) == expected

    @pytest.mark.parametrize(
        "n,expected",
        [(1, "one"), (21, "one"), (11, "many"), (3, "few"), (14, "many"), (5, "many")],
    )
    def test_east_slavic(self, n, expected):
        assert east_slavic_plural(n) == expected


class TestMessageLocalizer:
    """Tests for MessageLocalizer.translate."""

    @pytest.mark.parametrize("n,expected", [(1, "item"), (0, "items"), (2, "items")])
    def test_plural_selection(self, n, expected):
        assert MessageLocalizer().translate("listview", ITEMS, n) == expected

    def test_exact_match_wins(self):
        message = "{0, plural, =0{none} one{one} other{#}}"
        localizer = MessageLocalizer()

        assert localizer.translate("c", message, 0) == "none"
        assert localizer.translate("c", message, 1) == "one"
        assert localizer.translate("c", message, 42) == "42"

    def test_unknown_placeholders_untouched(self):
        output = MessageLocalizer().translate("c", "{begin} of {0} {x}", 5)
        assert output == "{begin} of 5 {x}"

    def test_named_params(self):
        output = MessageLocalizer().translate("c", "Hi {name}", {"name": "Ann"})
        assert output == "Hi Ann"

    def test_positional_params(self):
        output = MessageLocalizer().translate("c", "{0}/{1}", [3, 4])
        assert output == "3/4"

    def test_no_params_returns_message(self):
        assert MessageLocalizer().translate("c", ITEMS) == ITEMS

    def test_catalog_lookup(self):
        localizer = MessageLocalizer(
            catalogs={"es": {"No results found.": "No se encontraron resultados."}},
            language="es",
        )
        output = localizer.translate("listview", "No results found.")
        assert output == "No se encontraron resultados."

    def test_missing_translation_falls_back(self):
        localizer = MessageLocalizer(catalogs={"es": {}}, language="es")
        assert localizer.translate("listview", "No results found.") == "No results found."

    def test_explicit_language_overrides_default(self):
        localizer = MessageLocalizer(catalogs={"es": {"Hello": "Hola"}})
        assert localizer.translate("c", "Hello") == "Hello"
        assert localizer.translate("c", "Hello", language="es") == "Hola"

    def test_french_zero_is_singular(self):
        message = "{0, plural, one{# élément} other{# éléments}}"
        localizer = MessageLocalizer(language="fr")
        assert localizer.translate("c", message, 0) == "0 élément"
        assert localizer.translate("c", message, 2) == "2 éléments"

    @pytest.mark.parametrize(
        "n,expected", [(3, "3 файла"), (5, "5 файлов"), (21, "21 файл")]
    )
    def test_russian_forms(self, n, expected):
        message = "{n, plural, one{# файл} few{# файла} many{# файлов} other{# файла}}"
        output = MessageLocalizer().translate("c", message, {"n": n}, language="ru")
        assert output == expected

    def test_custom_plural_rule(self):
        localizer = MessageLocalizer(plural_rules={"xx": lambda n: "other"})
        assert localizer.translate("c", ITEMS, 3, language="xx") == "items"
        # exact selectors still apply before the rule
        assert localizer.translate("c", ITEMS, 1, language="xx") == "item"

    def test_regional_language_falls_back_to_base(self):
        localizer = MessageLocalizer()
        assert localizer.plural_rule("fr-CA") is french_plural
        assert localizer.plural_rule("pt_BR") is english_plural

    def test_params_inside_plural_branch(self):
        message = "{0, plural, =1{one {kind}} other{many {kind}}}"
        output = MessageLocalizer().translate("c", message, {"0": 2, "kind": "rows"})
        assert output == "many rows"
