"""
FastAPI HTTP server exposing Docker container health checks to Prometheus.
"""

import sys
import time
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
import uvicorn

from config import load_config, get_env_variables
from docker_client import RuntimeClient, RuntimeClientError
from health.container_health import CONTENT_TYPE, INTERNAL_SERVER_ERROR, ContainerHealthCollector
from health.health_checker import HandlerError, check_runtime_health
from observability.logger import setup_logging, get_logger
from observability.log_config import LogConfig
from observability.log_context import RequestContext

__version__ = "1.0.0"

router = APIRouter()


def get_runtime_client(request: Request) -> RuntimeClient:
    """Runtime client shared by all requests, created once at startup."""
    return request.app.state.runtime_client


@router.get("/health", response_class=PlainTextResponse)
def health(client: RuntimeClient = Depends(get_runtime_client)):
    """Liveness of the container runtime."""
    return PlainTextResponse(check_runtime_health(client))


@router.get("/metrics")
def metrics(client: RuntimeClient = Depends(get_runtime_client)):
    """Health check status of every container in Prometheus text format."""
    body = ContainerHealthCollector(client).collect()
    return Response(content=body, media_type=CONTENT_TYPE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release the runtime client on shutdown."""
    try:
        yield
    finally:
        app.state.runtime_client.close()
        get_logger("shutdown").info("Docker health exporter stopped")


async def handler_error_handler(request: Request, exc: HandlerError):
    """Write a handler failure as a 500 with the error message as body."""
    return PlainTextResponse(str(exc), status_code=500)


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with logging."""
    error_logger = get_logger("error")
    error_logger.error(
        "Unhandled exception occurred",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        exc_info=True
    )
    return PlainTextResponse(INTERNAL_SERVER_ERROR, status_code=500)


async def request_correlation_middleware(request: Request, call_next):
    """Add a request correlation ID and timing to every HTTP request."""
    with RequestContext(method=request.method, path=request.url.path) as ctx:
        api_logger = get_logger("api")
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        api_logger.info(
            "HTTP request completed",
            status_code=response.status_code,
            duration=duration,
            client_ip=request.client.host if request.client else "unknown"
        )

        response.headers["X-Request-ID"] = ctx.request_id
        return response


def create_app(runtime_client: RuntimeClient, base_url: str = "") -> FastAPI:
    """Build the exporter application with routes mounted under base_url."""
    app = FastAPI(
        title="Docker Health Exporter",
        description="Docker container health checks in Prometheus exposition format",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None
    )
    app.state.runtime_client = runtime_client

    app.include_router(router, prefix=base_url)
    app.add_exception_handler(HandlerError, handler_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    app.middleware("http")(request_correlation_middleware)

    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run the exporter until interrupted."""
    config = load_config(argv)

    log_config = LogConfig.from_env()
    log_config.level = config.log_level
    log_config.validate()
    setup_logging(
        level=log_config.level,
        format_type=log_config.format,
        output_type=log_config.output,
        file_path=log_config.file_path,
        max_size=log_config.max_size,
        backup_count=log_config.backup_count
    )

    startup_logger = get_logger("main")
    startup_logger.debug("Environment", **get_env_variables())

    try:
        client = RuntimeClient.from_env()
    except RuntimeClientError as e:
        startup_logger.error("failed to create docker client", error=str(e))
        sys.exit(1)

    app = create_app(client, config.base_url)

    startup_logger.info(
        "starting server",
        base_url=config.base_url,
        host=config.host,
        port=config.port,
        metrics_path=config.route("/metrics"),
        health_path=config.route("/health")
    )

    # uvicorn logs bind failures and exits non-zero itself
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False
    )


if __name__ == "__main__":
    main()
