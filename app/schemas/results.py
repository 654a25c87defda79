"""Uniform success/error envelope returned by every workflow operation."""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.core.exceptions import AppException

INVALID_INPUT_MESSAGE = "Invalid input data."


class ActionResult(BaseModel):
    """
    ``{"success": true, ...payload}`` or ``{"success": false, "error": "..."}``.

    Payload keys (``users``, ``centers``, ``user`` ...) are carried as extra
    fields. ``status_code`` only drives the HTTP status and is never serialized.
    """

    model_config = ConfigDict(extra="allow")

    success: bool
    error: str | None = None
    status_code: int = Field(default=200, exclude=True)

    @classmethod
    def ok(cls, status_code: int = 200, **payload: Any) -> "ActionResult":
        return cls(success=True, status_code=status_code, **payload)

    @classmethod
    def fail(cls, error: str, status_code: int = 500) -> "ActionResult":
        return cls(success=False, error=error, status_code=status_code)

    @classmethod
    def invalid_input(cls) -> "ActionResult":
        return cls.fail(INVALID_INPUT_MESSAGE, status_code=400)

    @classmethod
    def from_exception(cls, exc: AppException) -> "ActionResult":
        return cls.fail(exc.message, status_code=exc.status_code)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_response(self) -> JSONResponse:
        """Render as an HTTP response with the matching status code."""
        return JSONResponse(status_code=self.status_code, content=self.to_dict())
