from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snapmark_billing.api.deps import get_entitlement_store
from snapmark_billing.api.errors import register_exception_handlers
from snapmark_billing.api.routers import billing, status
from snapmark_billing.domain.exceptions import ConfigurationError
from snapmark_billing.shared.config import get_settings, require_stripe_secret


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    secret_key = require_stripe_secret(settings)
    logger.info("main: stripe_key_found prefix=%s...", secret_key[:15])
    logger.info(
        "main: ready service=%s port=%s pro_users_in_memory=%s",
        settings.service_name,
        settings.port,
        get_entitlement_store().pro_user_count(),
    )
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="SnapMark Payment Backend", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(status.router)
    app.include_router(billing.router)
    return app


app = create_app()


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    settings = get_settings()
    try:
        require_stripe_secret(settings)
    except ConfigurationError as exc:
        logger.error("main: %s", exc)
        raise SystemExit(1) from exc
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
