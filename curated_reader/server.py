"""
HTML to Markdown conversion service

FastAPI application exposing a single endpoint:
- POST <any path>  body=HTML (text/plain)  ->  200 Markdown (text/plain)

Any other method answers 405 with a plain-text body.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Config, ServerConfig
from .convert import HtmlToMarkdown
from .logging_config import create_execution_logger, setup_structured_logging


def create_app(
    server_config: ServerConfig | None = None,
    converter: HtmlToMarkdown | None = None,
) -> FastAPI:
    """Build the conversion service application."""
    server_config = server_config or ServerConfig()
    converter = converter or HtmlToMarkdown(heading_style=server_config.heading_style)
    logger = create_execution_logger("server")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Server running at {server_config.base_url}",
            host=server_config.host,
            port=server_config.port,
        )
        yield

    # No docs routes: every non-POST request is a 405
    app = FastAPI(
        title="HTML to Markdown",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_method_not_allowed(
        request: Request, exc: StarletteHTTPException
    ):
        if exc.status_code != 405:
            return await http_exception_handler(request, exc)
        return PlainTextResponse(
            "Method Not Allowed", status_code=405, headers={"Allow": "POST"}
        )

    @app.post("/{path:path}", response_class=PlainTextResponse)
    async def convert(request: Request, path: str) -> PlainTextResponse:
        body = await request.body()
        html = body.decode("utf-8", errors="replace")
        try:
            markdown = converter.convert(html)
        except Exception as e:
            logger.error(
                f"Failed to convert HTML: {e}",
                error=str(e),
                path=f"/{path}",
                content_length=len(body),
            )
            return PlainTextResponse("Error processing HTML", status_code=500)

        logger.debug(
            "Converted HTML to Markdown",
            path=f"/{path}",
            content_length=len(body),
            markdown_length=len(markdown),
        )
        return PlainTextResponse(markdown)

    return app


app = create_app()


def run(server_config: ServerConfig | None = None, log_level: str = "INFO") -> None:
    """Serve the conversion endpoint with uvicorn until interrupted."""
    server_config = server_config or Config().get_server_config()
    setup_structured_logging(log_level)
    uvicorn.run(
        create_app(server_config),
        host=server_config.host,
        port=server_config.port,
        log_level=log_level.lower(),
    )
