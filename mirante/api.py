"""Ponto de entrada REST que agrega os serviços do Mirante."""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from mirante.container import Container, build_container, log_configuration_warnings
from mirante.domain import MiranteError
from mirante.services.curation.api import include_routes as include_curation_routes
from mirante.services.dataset.api import include_routes as include_dataset_routes
from mirante.services.feed.api import include_routes as include_feed_routes
from mirante.settings import get_api_bind_host, get_api_port

logger = logging.getLogger("mirante.app")

RATE_LIMIT_MESSAGE = "Too many requests. Please wait before refreshing again."


def build_limiter(rate_limit: str | None) -> Limiter:
    """Limite por IP compartilhado entre todas as rotas da API."""

    return Limiter(
        key_func=get_remote_address,
        application_limits=[rate_limit] if rate_limit else [],
        enabled=bool(rate_limit),
    )


def _handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Síncrono: o middleware do slowapi chama o handler diretamente.
    logger.warning("Limite de requisições excedido para %s", get_remote_address(request))
    return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE})


def _background_tasks(container: Container) -> list[asyncio.Task]:
    settings = container.settings
    tasks = [asyncio.create_task(container.feed.cache.run_sweeper())]
    if container.dataset is not None and settings.collector_enabled:
        tasks.append(
            asyncio.create_task(
                container.dataset.collector_job.run_forever(
                    interval=settings.collector_interval,
                    initial_delay=settings.collector_initial_delay,
                )
            )
        )
    return tasks


def create_app(container: Container | None = None) -> FastAPI:
    """Cria a aplicação FastAPI com todas as rotas de serviços configuradas."""

    container = container or build_container()
    log_configuration_warnings(container.settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        tasks = _background_tasks(container)
        try:
            yield
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            await container.aclose()

    app = FastAPI(
        title="Mirante API",
        version="1.0.0",
        description=(
            "Agrega o feed de notícias sobre justiça climática, a curadoria "
            "editorial e a consulta ao dataset histórico."
        ),
        lifespan=lifespan,
    )
    app.state.container = container
    app.state.limiter = build_limiter(container.settings.api_rate_limit)
    app.add_middleware(SlowAPIMiddleware)

    app.add_exception_handler(RateLimitExceeded, _handle_rate_limit)

    @app.exception_handler(MiranteError)
    async def handle_mirante_error(request: Request, exc: MiranteError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s falhou: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request.") if errors else "Invalid request."
        return JSONResponse(status_code=400, content={"error": message})

    @app.get("/healthz", tags=["Saúde"])
    def healthz() -> dict[str, object]:
        return {
            "status": "ok",
            "newsapi": container.feed.news_gateway.configured,
            "curation": container.curation is not None,
            "dataset": container.dataset is not None,
        }

    include_feed_routes(app, container.feed)
    if container.curation is not None:
        include_curation_routes(app, container.curation)
    if container.dataset is not None:
        include_dataset_routes(app, container.dataset)

    # O limite vale só para /api/; saúde e documentação ficam de fora.
    for route in app.routes:
        endpoint = getattr(route, "endpoint", None)
        if endpoint is not None and not getattr(route, "path", "").startswith("/api/"):
            app.state.limiter.exempt(endpoint)
    return app


def run() -> None:
    """Executa a API agregada utilizando o Uvicorn."""

    uvicorn.run(
        "mirante.api:create_app",
        host=get_api_bind_host(),
        port=get_api_port(),
        factory=True,
    )


__all__ = ["create_app", "run"]
