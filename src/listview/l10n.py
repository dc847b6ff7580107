"""Localization of the built-in list view messages.

The list view never looks strings up through global state; it is handed a
Localizer. MessageLocalizer is the default one:

- catalogs: language -> {source message -> translated message}
- params: "{name}" placeholders are replaced when the name is in params;
  placeholders without a param are left untouched
- plurals: "{0, plural, =1{item} other{items}}" picks a branch through the
  plural rule of the target language ("#" inside a branch is the number)
"""

import re
from typing import Any, Callable, Mapping, Optional, Protocol, Union

PluralRule = Callable[[int], str]

_PLURAL_HEAD = re.compile(r"^\s*(\w+)\s*,\s*plural\s*,", re.DOTALL)


class Localizer(Protocol):
    """Translates built-in messages."""

    def translate(
        self,
        category: str,
        message: str,
        params: Union[Mapping[str, Any], list, tuple, Any, None] = None,
        language: Optional[str] = None,
    ) -> str:
        ...


def english_plural(n: int) -> str:
    """Plural category for English and similar languages."""
    return "one" if n == 1 else "other"


def french_plural(n: int) -> str:
    """Plural category for French, where 0 is singular too."""
    return "one" if n in (0, 1) else "other"


def east_slavic_plural(n: int) -> str:
    """Plural category for Russian, Ukrainian and Belarusian."""
    if n % 10 == 1 and n % 100 != 11:
        return "one"
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return "few"
    return "many"


DEFAULT_PLURAL_RULES: dict[str, PluralRule] = {
    "en": english_plural,
    "fr": french_plural,
    "ru": east_slavic_plural,
    "uk": east_slavic_plural,
    "be": east_slavic_plural,
}


def _normalize_params(params) -> dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return {str(k): v for k, v in params.items()}
    if isinstance(params, (list, tuple)):
        return {str(i): v for i, v in enumerate(params)}
    # A bare value is the first positional argument
    return {"0": params}


def _find_closing(text: str, start: int) -> int:
    """Index of the brace closing the one at start, or -1."""
    depth = 0
    for i in range(start, len(text)):
        if text[i] == "{":
            depth += 1
        elif text[i] == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _parse_plural_options(body: str) -> dict[str, str]:
    options: dict[str, str] = {}
    pos = 0
    while pos < len(body):
        brace = body.find("{", pos)
        if brace == -1:
            break
        selector = body[pos:brace].strip()
        end = _find_closing(body, brace)
        if end == -1:
            break
        options[selector] = body[brace + 1 : end]
        pos = end + 1
    return options


class MessageLocalizer:
    """Catalog-backed Localizer with pluggable plural rules.

    Args:
        catalogs: language -> {source message -> translation}.
        language: Language used when translate() is not given one.
        plural_rules: Extra or replacement plural rules by language.
    """

    def __init__(
        self,
        catalogs: Optional[dict[str, dict[str, str]]] = None,
        language: str = "en",
        plural_rules: Optional[dict[str, PluralRule]] = None,
    ):
        self.catalogs = dict(catalogs or {})
        self.language = language
        self.plural_rules = dict(DEFAULT_PLURAL_RULES)
        if plural_rules:
            self.plural_rules.update(plural_rules)

    def plural_rule(self, language: str) -> PluralRule:
        if language in self.plural_rules:
            return self.plural_rules[language]
        # "pt-BR" falls back to "pt"
        base = re.split(r"[-_]", language, maxsplit=1)[0]
        return self.plural_rules.get(base, english_plural)

    def translate(
        self,
        category: str,
        message: str,
        params=None,
        language: Optional[str] = None,
    ) -> str:
        language = language or self.language
        translated = self.catalogs.get(language, {}).get(message, message)
        return self.format(translated, _normalize_params(params), language)

    def format(self, message: str, params: dict[str, Any], language: str) -> str:
        """Replace known placeholders and resolve plural selections."""
        if not params:
            return message

        out = []
        pos = 0
        while True:
            start = message.find("{", pos)
            if start == -1:
                out.append(message[pos:])
                break
            end = _find_closing(message, start)
            if end == -1:
                out.append(message[pos:])
                break

            out.append(message[pos:start])
            inner = message[start + 1 : end]
            out.append(self._format_placeholder(inner, params, language, message[start : end + 1]))
            pos = end + 1

        return "".join(out)

    def _format_placeholder(
        self, inner: str, params: dict[str, Any], language: str, original: str
    ) -> str:
        name = inner.strip()
        if name in params:
            return str(params[name])

        match = _PLURAL_HEAD.match(inner)
        if match is None or match.group(1) not in params:
            return original

        number = params[match.group(1)]
        options = _parse_plural_options(inner[match.end() :])
        branch = options.get(f"={number}")
        if branch is None:
            branch = options.get(self.plural_rule(language)(int(number)))
        if branch is None:
            branch = options.get("other", "")

        branch = branch.replace("#", str(number))
        return self.format(branch, params, language)
