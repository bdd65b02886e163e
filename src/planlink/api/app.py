"""FastAPI app entrypoint."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from planlink.api.routes.plan_checks import router as plan_checks_router
from planlink.api.routes.projects import router as projects_router
from planlink.utils.logging import configure_root


def create_app() -> FastAPI:
    app = FastAPI(title="planlink API", version="0.1.0")
    app.include_router(projects_router)
    app.include_router(plan_checks_router)

    @app.get("/api/v1/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    configure_root()
    uvicorn.run("planlink.api.app:app", host="0.0.0.0", port=8000, reload=False)
