from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"


class LintRequest(BaseModel):
    """POST /lint: a source snippet plus optional rule selection."""

    code: str
    filename: str | None = None
    select: list[str] = []
    ignore: list[str] = []
