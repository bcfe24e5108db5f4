from __future__ import annotations

from fastapi import FastAPI

from jsstyle.api.lifespan import lifespan
from jsstyle.api.routes.health import router as health_router
from jsstyle.api.routes.lint import router as lint_router
from jsstyle.api.routes.rules import router as rules_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="jsstyle API",
        description="Check JavaScript sources against the style guide.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router, include_in_schema=False)
    app.include_router(rules_router)
    app.include_router(lint_router)

    return app
