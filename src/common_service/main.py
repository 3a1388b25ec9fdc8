"""
Demo entry points.

    python -m common_service.main          # leveled-write demo on stdout
    uvicorn common_service.main:create_app --factory
"""

import time

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from common_service.config.settings import Settings, get_settings
from common_service.core.logging import (
    AccessLogMiddleware,
    FieldKey,
    SessionContextMiddleware,
    get_app_logger,
    get_request_logger,
    new_app_logger,
    setup_logging,
)


class EchoPayload(BaseModel):
    message: str


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    base_logger = get_app_logger(settings)

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(AccessLogMiddleware, logger=base_logger)
    app.add_middleware(SessionContextMiddleware)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/echo")
    def echo(payload: EchoPayload, request: Request):
        log = get_request_logger(request, base_logger)
        log.info("echo", ref_id=payload.message, service_name="echo", result=payload)
        return {"message": payload.message}

    @app.get("/ping", response_class=PlainTextResponse)
    def ping():
        return "pong"

    return app


def run_demo() -> None:
    log = new_app_logger("DEBUG").with_field(FieldKey.APP_NAME, "TestApp111")
    log.info("[INFO]", time.time_ns(), "main", "Hello world!")
    log.error("[ERROR]", time.time_ns(), "main", 1024)

    log2 = log.clone().with_field(FieldKey.APP_NAME, "TestApp222")
    log2.info("[INFO]", time.time_ns(), "main", log2)
    log2.debug("[DEBUG]", time.time_ns(), "main", 555)


if __name__ == "__main__":
    setup_logging(get_settings())
    run_demo()
