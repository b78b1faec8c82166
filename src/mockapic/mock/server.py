"""
Mockapic Server

FastAPI-based HTTP server that stores canned responses and serves them back
by identifier.

Features:
- Create mocked responses from query parameters and a raw body
- Serve a mocked response by uuid, with an optional capped delay
- List stored mocks, most recent first
- Reference data for valid content types, charsets and status codes
- Background cleaning of the oldest mocks beyond a configured limit
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.concurrency import run_in_threadpool
import uvicorn

from ..common.content_types import CONTENT_TYPES, CHARSETS, HTTP_CODES
from ..config import ServerConfig
from .errors import ClientDisconnectedError, MockapicError, NotFoundError
from .mocker import Mock, Mocker
from .response import MockResponseWriter


LOGO = r"""
                       _                 _
  _ __ ___   ___   ___| | ____ _ _ __ (_) ___
 | '_ ` _ \ / _ \ / __| |/ / _` | '_ \| |/ __|
 | | | | | | (_) | (__|   < (_| | |_) | | (__
 |_| |_| |_|\___/ \___|_|\_\__,_| .__/|_|\___|
                                |_|
"""

ENDPOINTS = """
GET  /static/content-types   supported content types
GET  /static/charsets        supported charsets
GET  /static/status-codes    supported status codes
GET  /v1/list                stored mocks, most recent first
POST /v1/new                 create a mock (?status=&contentType=&charset=&<header>=, raw body)
ANY  /v1/{uuid}?delay=300ms  serve a mock
"""

# Methods a stored mock answers to
MOCK_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


class MockapicServer:
    """
    FastAPI application serving stored mocks.

    Example:
        server = MockapicServer(ServerConfig(working_directory='./mocks'))
        server.start(port=3333)

        # With a custom mock service (tests)
        server = MockapicServer(ServerConfig(), mocker=FakeMocker())
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        mocker: Optional[Mocker] = None,
        response_writer: Optional[MockResponseWriter] = None
    ):
        """
        Initialize the server.

        Args:
            config: Optional ServerConfig (defaults apply when omitted)
            mocker: Optional mock service (a Mock on config.working_directory if None)
            response_writer: Optional writer (one capped at config.max_delay if None)
        """
        self.config = config or ServerConfig()

        self.logger = logging.getLogger("mockapic.server")
        logging.getLogger("mockapic").setLevel(getattr(logging, self.config.log_level.upper()))

        self.mocker = mocker or Mock(self.config.working_directory)
        self.writer = response_writer or MockResponseWriter(self.config.max_delay_seconds)

        self.app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application with routes."""

        @contextlib.asynccontextmanager
        async def lifespan(app: FastAPI):
            cleaner = None
            if self.config.max_limit > 0 and self.config.clean_interval_seconds > 0:
                cleaner = asyncio.create_task(self._clean_periodically())
            try:
                yield
            finally:
                if cleaner is not None:
                    cleaner.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await cleaner

        app = FastAPI(
            title="Mockapic",
            description="Mock HTTP server serving canned responses by identifier",
            version="1.0.0",
            lifespan=lifespan
        )

        @app.exception_handler(MockapicError)
        async def mockapic_error_handler(request: Request, error: MockapicError):
            status_code = 404 if isinstance(error, NotFoundError) else 409
            return JSONResponse(status_code=status_code, content={'message': str(error)})

        @app.get("/", response_class=PlainTextResponse)
        def home():
            """Logo and endpoint overview."""
            return PlainTextResponse(LOGO + ENDPOINTS)

        @app.get("/static/content-types")
        def get_content_types() -> List[str]:
            return CONTENT_TYPES

        @app.get("/static/charsets")
        def get_charsets() -> List[str]:
            return CHARSETS

        @app.get("/static/status-codes")
        def get_status_codes() -> Dict[int, str]:
            return HTTP_CODES

        @app.get("/v1/list")
        def list_mocks():
            """List stored mocks, most recent first."""
            return JSONResponse(content=[light.to_dict() for light in self.mocker.list()])

        @app.post("/v1/new")
        async def add_new_mock(request: Request):
            """Create a mock from query parameters and the raw request body."""
            body = await request.body()
            params: Dict[str, List[str]] = {}
            for key, value in request.query_params.multi_items():
                params.setdefault(key, []).append(value)

            mock_id = await run_in_threadpool(self.mocker.new, params, body)
            return JSONResponse(content={'uuid': mock_id})

        @app.api_route("/v1/{mock_id}", methods=MOCK_METHODS)
        async def find_mock(request: Request, mock_id: str):
            """Serve a stored mock after the requested delay."""
            return await self._serve_mock(request, mock_id)

        return app

    async def _serve_mock(self, request: Request, mock_id: str) -> Response:
        """
        Load a mock and write it back to the client.

        Args:
            request: FastAPI Request object
            mock_id: Mock uuid from the path

        Returns:
            Response rebuilt from the stored mock
        """
        mocked = await run_in_threadpool(self.mocker.get, mock_id)
        requested_delay = request.query_params.get('delay')

        try:
            response = await self.writer.write(mocked, requested_delay, receive=request.receive)
        except ClientDisconnectedError:
            self.logger.info(f"Client left before mock {mock_id} was served")
            return Response(status_code=499)

        self.logger.debug(f"Served mock {mock_id} ({mocked.status})")
        return response

    async def clean(self) -> int:
        """
        Run one cleaning pass with the configured limit.

        Listing failures are logged, not raised, so the background loop keeps
        running.

        Returns:
            Number of mocks removed
        """
        try:
            removed = await run_in_threadpool(self.mocker.clean, self.config.max_limit)
        except MockapicError as e:
            self.logger.error(f"Error to clean mocks: {e}")
            return 0

        if removed:
            self.logger.info(f"Removed {removed} old mock(s) (limit {self.config.max_limit})")
        return removed

    async def _clean_periodically(self):
        """Clean every clean_interval until cancelled."""
        interval = self.config.clean_interval_seconds
        while True:
            await asyncio.sleep(interval)
            await self.clean()

    def start(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        access_log: bool = True
    ):
        """
        Start the server (blocking).

        Args:
            host: Host to bind to (overrides config)
            port: Port to bind to (overrides config)
            access_log: Enable access logging
        """
        actual_host = host or self.config.host
        actual_port = port or self.config.port

        print(LOGO)
        print(f"   Host: {actual_host}:{actual_port}")
        print(f"   Working directory: {self.config.working_directory}")
        print(f"   Max delay: {self.config.max_delay}")
        if self.config.max_limit > 0:
            print(f"   Max mocks: {self.config.max_limit} (cleaned every {self.config.clean_interval})")
        print()

        uvicorn.run(
            self.app,
            host=actual_host,
            port=actual_port,
            log_level=self.config.log_level,
            access_log=access_log
        )

    def get_app(self) -> FastAPI:
        """
        Get the FastAPI app instance for testing or custom deployment.

        Returns:
            FastAPI application instance
        """
        return self.app


def create_server(
    working_directory: str = "./mocks",
    host: str = "127.0.0.1",
    port: int = 3333,
    max_delay: str = "60s",
    max_limit: int = 0,
    clean_interval: str = "1m",
    log_level: str = "info"
) -> MockapicServer:
    """
    Convenience function to create and configure a server.

    Args:
        working_directory: Directory holding the stored mocks
        host: Host to bind to
        port: Port to bind to
        max_delay: Ceiling for requested delays
        max_limit: Maximum number of mocks kept (0 = unlimited)
        clean_interval: Period of the background cleaner
        log_level: debug, info, warning or error

    Returns:
        Configured MockapicServer instance

    Example:
        server = create_server('./mocks', port=3333, max_delay='10s', max_limit=100)
        server.start()
    """
    config = ServerConfig(
        host=host,
        port=port,
        working_directory=working_directory,
        max_delay=max_delay,
        max_limit=max_limit,
        clean_interval=clean_interval,
        log_level=log_level
    )

    return MockapicServer(config=config)
