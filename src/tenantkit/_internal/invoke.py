"""Invoke helpers — call sync or async collaborators uniformly.

Auth services, validators, use-case handlers, and response transformers
may each be ``def`` or ``async def``. The sync/async check lives here
and nowhere else.

Usage::

    from tenantkit._internal.invoke import invoke

    principal = await invoke(auth_service.authenticate, AuthInput(headers=headers, cookies={}))
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
