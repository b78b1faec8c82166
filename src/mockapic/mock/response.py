"""
Mockapic Response Writer

Turns a stored mock back into an HTTP response, after an optional artificial
delay. The delay a request asks for is capped by the server-wide maximum and
is abandoned as soon as the client disconnects or the request task is
cancelled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from fastapi.responses import Response

from ..common.content_types import RESERVED_HEADERS
from ..common.utils import canonical_header_key, parse_duration
from .errors import ClientDisconnectedError
from .models import MockedRequest


# ASGI receive callable
Receive = Callable[[], Awaitable[Dict[str, Any]]]


async def _wait_for_disconnect(receive: Receive) -> None:
    while True:
        message = await receive()
        if message.get('type') == 'http.disconnect':
            return


class MockResponseWriter:
    """
    Render MockedRequest objects as FastAPI responses.

    Example:
        writer = MockResponseWriter(max_delay='60s')
        response = await writer.write(mocked, requested_delay='250ms')
    """

    def __init__(self, max_delay: Union[str, int, float] = '60s'):
        """
        Initialize the writer.

        Args:
            max_delay: Hard ceiling for requested delays, as a duration
                string ("60s", "1500ms") or seconds

        Raises:
            ValueError: If max_delay is not a valid, non-negative duration
        """
        self.max_delay = parse_duration(max_delay)
        if self.max_delay < 0:
            raise ValueError(f"max delay must not be negative: {max_delay!r}")
        self.logger = logging.getLogger("mockapic.response")

    def resolve_delay(self, requested: Optional[str]) -> float:
        """
        Effective delay in seconds for a requested duration.

        Absent, unparsable or negative requests give no delay; anything
        else is capped at max_delay.
        """
        if not requested:
            return 0.0
        try:
            seconds = parse_duration(requested)
        except ValueError:
            self.logger.debug(f"Ignoring invalid delay {requested!r}")
            return 0.0
        if seconds <= 0:
            return 0.0
        return min(seconds, self.max_delay)

    async def wait(self, seconds: float, receive: Optional[Receive] = None) -> None:
        """
        Suspend the current request for `seconds`.

        Args:
            seconds: Delay to apply
            receive: ASGI receive callable; when given, the wait ends early
                if the client disconnects

        Raises:
            ClientDisconnectedError: If the client disconnected during the wait
        """
        if seconds <= 0:
            return
        if receive is None:
            await asyncio.sleep(seconds)
            return

        sleeper = asyncio.ensure_future(asyncio.sleep(seconds))
        watcher = asyncio.ensure_future(_wait_for_disconnect(receive))
        try:
            done, _ = await asyncio.wait({sleeper, watcher}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, watcher):
                if not task.done():
                    task.cancel()

        if sleeper not in done:
            # Surfaces a failing receive() instead of reporting a disconnect
            watcher.result()
            raise ClientDisconnectedError("client disconnected during delay")

    def render(self, mocked: MockedRequest) -> Response:
        """
        Build the response for a mock.

        Content-Type is set first from the mock's content type and charset,
        then every stored header under its canonical name. Reserved names
        never reach a stored mock through `new`; records written by other
        means still have them dropped here.
        """
        headers = {'Content-Type': f"{mocked.content_type}; charset={mocked.charset}"}
        for key, value in mocked.headers.items():
            if key.lower() in RESERVED_HEADERS:
                continue
            headers[canonical_header_key(key)] = value

        return Response(content=mocked.body, status_code=mocked.status, headers=headers)

    async def write(
        self,
        mocked: MockedRequest,
        requested_delay: Optional[str] = None,
        receive: Optional[Receive] = None
    ) -> Response:
        """
        Wait the effective delay, then render the mock.

        Args:
            mocked: Stored mock to serve
            requested_delay: Delay asked for by the client, e.g. "1500ms"
            receive: ASGI receive callable used to notice disconnects

        Returns:
            Response for the mock
        """
        delay = self.resolve_delay(requested_delay)
        if delay > 0:
            self.logger.debug(f"Delaying mock {mocked.uuid} by {delay:.3f}s")
        await self.wait(delay, receive)
        return self.render(mocked)
