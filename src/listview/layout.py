"""Layout templating for list views.

A layout is plain text with section tokens, e.g. "{summary}\\n{items}\\n{pager}".
Every token-shaped substring ({word}) is handed to a section renderer in
template order. A renderer returns the section markup, or None when it
does not know the token; unknown tokens stay in the output verbatim.

Repeated tokens are rendered once per occurrence.
"""

import logging
import re
from enum import Enum
from typing import Callable, Optional

from .common import DEFAULT_LAYOUT

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\{\w+\}")

# token -> markup, or None if the token is not a known section
SectionRenderer = Callable[[str], Optional[str]]


class SectionKind(Enum):
    """Sections a list view knows how to render."""

    SUMMARY = "summary"
    ITEMS = "items"
    SORTER = "sorter"
    PAGER = "pager"

    @property
    def token(self) -> str:
        return "{" + self.value + "}"

    @classmethod
    def from_token(cls, token: str) -> Optional["SectionKind"]:
        """Look up the section for a token like "{items}"; None if unknown."""
        if not (token.startswith("{") and token.endswith("}")):
            return None
        try:
            return cls(token[1:-1])
        except ValueError:
            return None


def find_tokens(template: str) -> list[str]:
    """All tokens in a layout, in order, duplicates included."""
    return TOKEN_PATTERN.findall(template)


def render_layout(
    template: Optional[str],
    render_section: SectionRenderer,
) -> str:
    """Replace each token in a layout with its rendered section.

    Args:
        template: Layout template (None selects the default layout).
        render_section: Called with each token, braces included.

    Returns:
        The layout with known tokens replaced.
    """
    if template is None:
        template = DEFAULT_LAYOUT

    def _replace(match: re.Match) -> str:
        token = match.group(0)
        content = render_section(token)
        if content is None:
            logger.debug("Leaving unsupported layout token %s", token)
            return token
        return content

    return TOKEN_PATTERN.sub(_replace, template)
