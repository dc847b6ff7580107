"""Common utilities and constants for listview.

This module defines constants and helpers shared by all components.
"""

import asyncio
import inspect
from typing import Any

# Layout used when none is configured
DEFAULT_LAYOUT = "{summary}\n{items}\n{pager}"

# Tag name of the outer container when options do not name one
DEFAULT_CONTAINER_TAG = "div"

# Message category used for the built-in strings
MESSAGE_CATEGORY = "listview"


def resolve_result(value: Any) -> Any:
    """Return a collaborator result, blocking on it if it is awaitable.

    Args:
        value: Plain value or awaitable returned by a collaborator.

    Returns:
        The value itself, or the awaited result.

    Raises:
        RuntimeError: If the value is awaitable and an event loop is
            already running in this thread.
    """
    if not inspect.isawaitable(value):
        return value

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        if inspect.iscoroutine(value):
            value.close()
        raise RuntimeError(
            "Cannot block on an awaitable collaborator result "
            "inside a running event loop"
        )

    if inspect.iscoroutine(value):
        return asyncio.run(value)

    async def _wait() -> Any:
        return await value

    return asyncio.run(_wait())
