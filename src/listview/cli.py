"""Command-line interface for listview."""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .config import load_config
from .data import ArrayDataSource, PaginationState, SortState
from .errors import (
    ConfigurationError,
    data_invalid,
    file_not_found,
    invalid_argument,
    print_error,
)
from .view import ListView


def _load_models(path: Path) -> list[dict]:
    """Read a JSON array of objects.

    Raises:
        ValueError: With the reason the file is unusable.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}")
    except UnicodeDecodeError as e:
        raise ValueError(f"not UTF-8 text: {e}")
    except OSError as e:
        raise ValueError(f"cannot read file: {e.strerror or e}")

    if not isinstance(data, list):
        raise ValueError("top-level value is not an array")
    if not all(isinstance(row, dict) for row in data):
        raise ValueError("array entries must be objects")
    return data


def _json_item(model, key, index, view) -> str:
    return json.dumps(model, sort_keys=True)


# Options whose values may start with "-", e.g. a descending sort "-name"
DASH_VALUE_OPTIONS = ("--sort",)


def _join_dash_values(argv: list[str]) -> list[str]:
    """Rewrite "--sort -name" as "--sort=-name" so argparse reads a value."""
    joined = []
    args = iter(argv)
    for arg in args:
        if arg in DASH_VALUE_OPTIONS:
            value = next(args, None)
            if value is not None and value.startswith("-") and not value.startswith("--"):
                joined.append(f"{arg}={value}")
                continue
            joined.append(arg)
            if value is not None:
                joined.append(value)
            continue
        joined.append(arg)
    return joined


def cmd_render(args: argparse.Namespace) -> int:
    """Handle the render command."""
    data_path = Path(args.data)

    if not data_path.exists():
        print_error(file_not_found(str(data_path)), args.json)
        return 1

    try:
        models = _load_models(data_path)
    except ValueError as e:
        print_error(data_invalid(str(data_path), str(e)), args.json)
        return 1

    if args.page < 1:
        print_error(invalid_argument("--page", str(args.page), "must be 1 or more"), args.json)
        return 1

    pagination = None
    if args.page_size is not None:
        if args.page_size < 1:
            print_error(
                invalid_argument("--page-size", str(args.page_size), "must be 1 or more"),
                args.json,
            )
            return 1
        pagination = PaginationState(page=args.page - 1, page_size=args.page_size)

    attributes = sorted({name for row in models for name in row})
    sort = SortState.from_param(attributes, args.sort) if attributes else None

    data_source = ArrayDataSource(models, pagination=pagination, sort=sort)

    overrides = {"item_view": args.item or _json_item}
    if args.layout is not None:
        overrides["layout"] = args.layout.replace("\\n", "\n")
    if args.summary is not None:
        overrides["summary"] = args.summary
    if args.no_empty:
        overrides["empty"] = False
    elif args.empty is not None:
        overrides["empty"] = args.empty

    try:
        config = load_config(args.config) if args.config else {}
        view = ListView.from_config(config, data_source, **overrides)
        html = view.render()
    except ConfigurationError as e:
        print_error(e.error, args.json)
        return 1
    except KeyError as e:
        print_error(
            invalid_argument("--item", args.item or "", f"unknown field {e}"),
            args.json,
        )
        return 1
    except TypeError as e:
        print_error(data_invalid(str(data_path), f"cannot sort: {e}"), args.json)
        return 1

    if args.json:
        output = {
            "html": html,
            "summary": view.summary_values().to_dict(),
        }
        print(json.dumps(output, indent=2))
    else:
        print(html)

    return 0


def main(argv: list[str] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="listview",
        description="Render paginated, sortable lists as markup",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # render command
    render_parser = subparsers.add_parser("render", help="Render a JSON array as a list")
    render_parser.add_argument("data", help="JSON file holding an array of objects")
    render_parser.add_argument(
        "--page", type=int, default=1, help="Page to show (1-based, default: 1)"
    )
    render_parser.add_argument(
        "--page-size", type=int, help="Records per page (default: no pagination)"
    )
    render_parser.add_argument(
        "--sort", help='Sort parameter; a leading "-" sorts descending, e.g. "-name,age"'
    )
    render_parser.add_argument(
        "--item", help='Item template filled from record fields, e.g. "{name}"'
    )
    render_parser.add_argument("--layout", help="Layout template (\\n for newlines)")
    render_parser.add_argument("--summary", help="Summary template")
    empty_group = render_parser.add_mutually_exclusive_group()
    empty_group.add_argument("--empty", help="Message shown when there are no records")
    empty_group.add_argument(
        "--no-empty",
        action="store_true",
        help="Render the layout even when there are no records",
    )
    render_parser.add_argument("--config", help="JSON configuration file")
    render_parser.add_argument("--json", action="store_true", help="Output as JSON")
    render_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log render steps to stderr"
    )
    render_parser.set_defaults(func=cmd_render)

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(_join_dash_values(argv))

    if not args.command:
        parser.print_help()
        return 0

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
