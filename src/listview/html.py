"""Markup helpers for listview.

Wraps content in tagged elements. All functions are pure.

Attribute rendering rules:
- Values are escaped; content is not (it is already markup)
- True renders a bare attribute, None and False drop it
- A list "class" value is joined with spaces
- A "data" dict expands into data-* attributes
"""

import html
import json
from typing import Any, Mapping, Optional

# Elements that never have content or a closing tag
VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


def encode(text: Any) -> str:
    """Escape text for use inside markup."""
    return html.escape(str(text), quote=True)


def _attribute_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


def render_attributes(attributes: Optional[Mapping[str, Any]]) -> str:
    """Render attributes as a string starting with a space (or empty).

    Args:
        attributes: Attribute name -> value.

    Returns:
        String like ' class="list" id="x"'.
    """
    if not attributes:
        return ""

    parts = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if name == "data" and isinstance(value, Mapping):
            for data_name, data_value in value.items():
                if data_value is None or data_value is False:
                    continue
                parts.append(f' data-{data_name}="{encode(_attribute_value(data_value))}"')
            continue
        if value is True:
            parts.append(f" {name}")
            continue
        parts.append(f' {name}="{encode(_attribute_value(value))}"')

    return "".join(parts)


def tag(name: str, content: str = "", attributes: Optional[Mapping[str, Any]] = None) -> str:
    """Wrap content in an element.

    Args:
        name: Tag name.
        content: Inner markup (not escaped).
        attributes: Element attributes.

    Returns:
        Element markup.
    """
    attrs = render_attributes(attributes)
    if name.lower() in VOID_ELEMENTS:
        return f"<{name}{attrs}>"
    return f"<{name}{attrs}>{content}</{name}>"


def split_tag_options(
    options: Optional[Mapping[str, Any]], default_tag: str
) -> tuple[str, dict[str, Any]]:
    """Separate the "tag" key from element options without mutating them.

    Returns:
        Tuple of (tag_name, remaining_attributes).
    """
    attributes = dict(options or {})
    tag_name = attributes.pop("tag", default_tag) or default_tag
    return tag_name, attributes
