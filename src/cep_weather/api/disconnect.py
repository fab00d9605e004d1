"""
cep_weather.api.disconnect

Abandon a request's pipeline when its client goes away.

Responsibilities:
- Watch the ASGI receive channel for `http.disconnect` while the pipeline runs.
- Cancel in-flight outbound calls (geocode, weather, delegation) on disconnect
  and report it as `ClientDisconnect`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

import anyio
from starlette.requests import ClientDisconnect, Request

T = TypeVar("T")


async def run_until_disconnect(request: Request, call: Callable[[], Awaitable[T]]) -> T:
    """
    Await `call()` unless the client disconnects first.

    The request body must already be consumed: the watcher reads the receive
    channel and would otherwise swallow body chunks.
    """

    disconnected = False
    error: Exception | None = None
    result: T | None = None

    async with anyio.create_task_group() as tg:

        async def watch() -> None:
            nonlocal disconnected
            while True:
                message = await request.receive()
                if message["type"] == "http.disconnect":
                    disconnected = True
                    tg.cancel_scope.cancel()
                    return

        tg.start_soon(watch)
        try:
            result = await call()
        except Exception as e:
            # Re-raised below, outside the task group, so handlers see the bare error.
            error = e
        finally:
            tg.cancel_scope.cancel()

    if disconnected:
        raise ClientDisconnect()
    if error is not None:
        raise error
    return result  # type: ignore[return-value]


# --- Module Notes -----------------------------------------------------------
# Servers do not cancel plain endpoints on disconnect by themselves; without this
# the outbound calls of an abandoned request would run to completion.
