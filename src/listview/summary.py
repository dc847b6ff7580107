"""Summary text for a list view.

Turns counts and pagination into the numbers a reader sees ("Showing
6-10 of 50 items.") and fills a summary template with them.

Tokens filled in the template:
- {begin}: first record number shown (1-based)
- {end}: last record number shown (1-based)
- {count}: records shown
- {totalCount}: records available
- {page}: current page (1-based)
- {pageCount}: pages available

Without pagination (or with nothing shown) there is no knowable total,
so the visible count stands in for both {end} and {totalCount}.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .common import MESSAGE_CATEGORY
from .data import PaginationState
from .html import tag
from .l10n import Localizer

PAGED_SUMMARY_MESSAGE = (
    "Showing <b>{begin}-{end}</b> of <b>{totalCount}</b> "
    "{0, plural, =1{item} other{items}}."
)
TOTAL_SUMMARY_MESSAGE = "Total <b>{count}</b> {0, plural, =1{item} other{items}}."


@dataclass(frozen=True)
class SummaryValues:
    """Numbers shown in a summary, 1-based where a reader sees them."""

    begin: int
    end: int
    count: int
    total_count: int
    page: int
    page_count: int
    paginated: bool = False

    def tokens(self) -> dict[str, str]:
        """Template token -> replacement text."""
        return {
            "{begin}": str(self.begin),
            "{end}": str(self.end),
            "{count}": str(self.count),
            "{totalCount}": str(self.total_count),
            "{page}": str(self.page),
            "{pageCount}": str(self.page_count),
        }

    def to_dict(self) -> dict:
        return {
            "begin": self.begin,
            "end": self.end,
            "count": self.count,
            "total_count": self.total_count,
            "page": self.page,
            "page_count": self.page_count,
        }


def compute_summary_values(
    count: int,
    total_count: int,
    pagination: Optional[PaginationState],
) -> SummaryValues:
    """Compute the display numbers for a summary.

    Args:
        count: Records on the current page.
        total_count: Records across all pages (used only with pagination).
        pagination: Pagination state, or None when the data is not paged.

    Returns:
        SummaryValues for this render.
    """
    if pagination is not None and count > 0:
        begin = pagination.page * pagination.page_size + 1
        return SummaryValues(
            begin=begin,
            end=begin + count - 1,
            count=count,
            total_count=total_count,
            page=pagination.page + 1,
            page_count=pagination.page_count,
            paginated=True,
        )

    return SummaryValues(
        begin=1,
        end=count,
        count=count,
        total_count=count,
        page=1,
        page_count=1,
    )


def fill_summary_template(template: str, values: SummaryValues) -> str:
    """Replace summary tokens in a single pass.

    Replacement text is never rescanned, and tokens outside the summary
    vocabulary are left as they are.
    """
    tokens = values.tokens()
    pattern = re.compile("|".join(re.escape(t) for t in tokens))
    return pattern.sub(lambda m: tokens[m.group(0)], template)


def default_summary_template(
    values: SummaryValues,
    localizer: Localizer,
    language: Optional[str] = None,
) -> str:
    """Localized default summary wrapped in a summary block."""
    if values.paginated:
        text = localizer.translate(
            MESSAGE_CATEGORY, PAGED_SUMMARY_MESSAGE, values.total_count, language
        )
    else:
        text = localizer.translate(
            MESSAGE_CATEGORY, TOTAL_SUMMARY_MESSAGE, values.count, language
        )
    return tag("div", text, {"class": "summary"})


def render_summary(
    count: int,
    total_count: int,
    pagination: Optional[PaginationState],
    template: Optional[str],
    localizer: Localizer,
    language: Optional[str] = None,
) -> str:
    """Render the summary section.

    Args:
        count: Records on the current page.
        total_count: Records across all pages.
        pagination: Pagination state or None.
        template: Custom summary template; None selects the localized default.
        localizer: Localizer for the default template.
        language: Target language (default: the localizer's).

    Returns:
        Summary markup; "" when the template is "".
    """
    values = compute_summary_values(count, total_count, pagination)
    if template is None:
        template = default_summary_template(values, localizer, language)
    return fill_summary_template(template, values)
