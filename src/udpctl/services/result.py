"""ServiceResult and ServiceError — the universal command contract.

INVARIANT: Every interpreter command returns a ServiceResult.
The shell, the formatter, and the tests consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for interpreter commands.

    Attributes:
        ok: Whether the command succeeded.
        op: Name of the command (e.g. ``"send"``).
        data: Command-specific payload on success.
        warnings: Non-fatal issues encountered during the command.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
