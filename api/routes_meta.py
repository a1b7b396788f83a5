from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Basic health check for smoke tests and deployment liveness checks."""
    services = getattr(request.app.state, "wallet", None)
    return {"ok": services is not None}


@router.get("/api/_routes")
async def routes_info(request: Request):
    app = request.app
    return {
        "routes": [
            {
                "path": getattr(r, "path", None),
                "name": getattr(r, "name", None),
                "methods": sorted(list(getattr(r, "methods", []) or [])),
            }
            for r in app.router.routes
        ]
    }
