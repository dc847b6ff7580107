"""Centralized error handling for listview.

This module provides:
- Standard error codes
- Error envelope format for --json output
- ConfigurationError, the exception raised for unusable configuration
- Helper functions for consistent error reporting
"""

import json
import sys
from dataclasses import dataclass, field


# =============================================================================
# Error Codes
# =============================================================================

# Configuration errors
DATA_SOURCE_MISSING = "DATA_SOURCE_MISSING"
ITEM_VIEW_MISSING = "ITEM_VIEW_MISSING"
CONFIG_INVALID = "CONFIG_INVALID"
WIDGET_INVALID = "WIDGET_INVALID"

# Input errors
INVALID_ARGUMENT = "INVALID_ARGUMENT"
DATA_INVALID = "DATA_INVALID"
FILE_NOT_FOUND = "FILE_NOT_FOUND"


# =============================================================================
# Error Envelope
# =============================================================================


@dataclass
class ListViewError:
    """Structured error for JSON output.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        hints: Actionable suggestions for resolving the error.
        details: Context-specific error details.
    """

    code: str
    message: str
    hints: list[str] = field(default_factory=list)
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to error envelope dict."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "hints": self.hints,
                "details": self.details,
            }
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def print_json(self, file=None) -> None:
        """Print error as JSON to file (default: stderr)."""
        if file is None:
            file = sys.stderr
        print(self.to_json(), file=file)

    def print_text(self, file=None) -> None:
        """Print error as human-readable text to file (default: stderr)."""
        if file is None:
            file = sys.stderr
        print(f"Error: {self.message}", file=file)
        if self.hints:
            for hint in self.hints:
                print(f"  Hint: {hint}", file=file)


class ConfigurationError(Exception):
    """Raised when a list view is configured in a way that cannot render."""

    def __init__(self, error: ListViewError):
        self.error = error
        super().__init__(error.message)

    @property
    def code(self) -> str:
        return self.error.code


# =============================================================================
# Factory Functions
# =============================================================================


def data_source_missing() -> ListViewError:
    """Create error for a list view without a data source."""
    return ListViewError(
        code=DATA_SOURCE_MISSING,
        message='The "data_source" property must be set.',
        hints=["Pass data_source= when creating the list view"],
    )


def item_view_missing() -> ListViewError:
    """Create error for a list view without an item renderer."""
    return ListViewError(
        code=ITEM_VIEW_MISSING,
        message='The "item_view" property must be set.',
        hints=[
            "Pass item_view= (a callable taking model, key, index, view)",
            "Or subclass BaseListView and implement render_items()",
        ],
    )


def config_invalid(path: str, reason: str) -> ListViewError:
    """Create error for configuration that fails schema validation."""
    return ListViewError(
        code=CONFIG_INVALID,
        message=f"Invalid configuration at '{path}': {reason}",
        hints=["Check the configuration against listview.schema.json"],
        details={"path": path, "reason": reason},
    )


def widget_invalid(section: str, widget: object) -> ListViewError:
    """Create error for a pager or sorter without a render() method."""
    return ListViewError(
        code=WIDGET_INVALID,
        message=f"The {section} widget must provide render(config): {widget!r}",
        hints=[f"Configure {section}={{'widget': <object with render(config)>}}"],
        details={"section": section, "widget": repr(widget)},
    )


def invalid_argument(arg_name: str, value: str, reason: str = "") -> ListViewError:
    """Create error for invalid argument."""
    msg = f"Invalid argument '{arg_name}': {value}"
    if reason:
        msg += f" ({reason})"
    return ListViewError(
        code=INVALID_ARGUMENT,
        message=msg,
        hints=[
            "Check the argument value",
            "Run: listview <command> --help",
        ],
        details={"argument": arg_name, "value": value, "reason": reason},
    )


def data_invalid(path: str, reason: str) -> ListViewError:
    """Create error for a data file that is not a JSON array of objects."""
    return ListViewError(
        code=DATA_INVALID,
        message=f"Invalid data file: {path} ({reason})",
        hints=["The data file must hold a JSON array of objects"],
        details={"path": path, "reason": reason},
    )


def file_not_found(path: str) -> ListViewError:
    """Create error for missing file."""
    return ListViewError(
        code=FILE_NOT_FOUND,
        message=f"File not found: {path}",
        hints=["Check that the file path is correct"],
        details={"path": path},
    )


# =============================================================================
# Output Helper
# =============================================================================


def print_error(
    error: ListViewError,
    json_mode: bool = False,
    file=None,
) -> None:
    """Print error in appropriate format.

    Args:
        error: The error to print.
        json_mode: If True, print as JSON envelope. If False, print as text.
        file: Output file (default: stderr).
    """
    if json_mode:
        error.print_json(file)
    else:
        error.print_text(file)
