"""ServiceResult and ServiceError — the resolver's result contract.

INVARIANT: All service-layer methods return ServiceResult.
Resolver failures are reported as data, never raised past the service
boundary. The CLI consumes this type through ``AppContext.emit``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is one of ``PACKAGE_NOT_FOUND`` or ``CYCLE_DETECTED``;
    ``detail`` carries the missing package or the offending cycle.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for resolver operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"install_order"``).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (graph counts, settings in effect).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
