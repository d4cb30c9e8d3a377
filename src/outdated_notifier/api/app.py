"""FastAPI application factory for the update notifier.

Endpoints: /health, /config, /metrics plus the update and settings routers.
On startup the coordinator schedules the session's single update check.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from core import metrics
from core.updates.scheduler import schedule_initial_check
from outdated_notifier.api.routes.settings import router as settings_router
from outdated_notifier.api.routes.updates import router as updates_router
from outdated_notifier.api.runtime import Runtime, build_runtime


def create_app(runtime: Runtime | None = None) -> FastAPI:
    rt = runtime or build_runtime()

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # noqa: D401
        task = schedule_initial_check(
            rt.notifier,
            rt.users,
            rt.notifier.current_user_id,
            rt.config.notifier.initial_check_delay_s,
        )
        try:
            yield
        finally:
            if task is not None and not task.done():
                task.cancel()

    app = FastAPI(
        title="Module Outdated Notifier API",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.runtime = rt

    # Dev CORS (host UI served from another origin)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():  # noqa: D401
        return {"status": "ok"}

    @app.get("/config")
    def config():  # noqa: D401
        cfg = rt.config.notifier
        return {
            "endpoint": cfg.endpoint,
            "package_type": cfg.package_type,
            "host_version": cfg.host_version,
            "chunk_size": cfg.chunk_size,
            "initial_check_delay_s": cfg.initial_check_delay_s,
            "checker_state": rt.checker.state.value,
        }

    @app.get("/metrics")
    def metrics_snapshot():  # noqa: D401
        return metrics.snapshot()

    app.include_router(updates_router)
    app.include_router(settings_router)

    @app.middleware("http")
    async def _metrics_mw(request: Request, call_next):  # noqa: D401
        start = time.time()
        labels = {"route": request.url.path, "method": request.method}
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.time() - start) * 1000.0
            metrics.inc("api_request_total", labels)
            metrics.observe("api_request_latency_ms", duration_ms, labels)
            if response is not None and response.status_code >= 400:
                metrics.inc(
                    "api_request_errors_total",
                    labels | {"status": response.status_code},
                )

    return app


app = create_app()


def main() -> None:  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "outdated_notifier.api.app:app", host="127.0.0.1", port=8000, reload=False
    )


if __name__ == "__main__":  # pragma: no cover
    main()
