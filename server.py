from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import settings
from passkit import build_services
from storage.gateway import WalletStore

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


app = FastAPI(title="Wallet Pass Sync Server")
app.state.wallet = None


@app.on_event("startup")
async def _startup_init():
    # Resolve the DB path at startup so WALLET_DB_PATH can be set late (tests, process managers).
    store = WalletStore()
    store.init_schema()
    app.state.wallet = build_services(store)
    logger.info(f"wallet services ready: {store!r} not_found_status={settings.PASSKIT_NOT_FOUND_STATUS}")


def _configure_cors(_app: FastAPI) -> None:
    """Environment-driven CORS.

    - If CORS_ALLOW_ORIGINS is set (comma-separated), use the explicit list.
    - Otherwise, default to localhost/127.0.0.1 only.
    """
    origins_raw = (os.getenv("CORS_ALLOW_ORIGINS") or "").strip()
    origin_regex = (os.getenv("CORS_ALLOW_ORIGIN_REGEX") or "").strip()

    if origins_raw:
        origins = [o.strip() for o in origins_raw.split(",") if o.strip()]
        _app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.info(f"CORS: allow_origins={origins}")
        return

    if not origin_regex:
        origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"
    _app.add_middleware(
        CORSMiddleware,
        allow_origins=[],
        allow_origin_regex=origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS: allow_origin_regex={origin_regex}")


_configure_cors(app)


# Routers (meta first: /api/_routes must not be shadowed by /{version}/...)
from api.routes_meta import router as meta_router  # noqa: E402
from api.routes_passkit import router as passkit_router  # noqa: E402

app.include_router(meta_router)
app.include_router(passkit_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.UVICORN_RELOAD,
    )
