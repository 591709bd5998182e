"""ServiceResult — what every service method returns.

Expected failures (missing source directory, bad frontmatter, unwritable
output) come back as ``ok=False`` results with a :class:`ServiceError`;
services raise only for programming errors. ``AppContext.emit`` turns a
result into stdout/stderr output and an exit code.

Error codes:

- ``NO_CONTENT_SOURCE``: the ``[source]`` directory does not exist.
- ``INVALID_CONTENT``: a markdown document cannot be parsed or routed.
- ``TEMPLATE_ERROR``: a page or scaffold template failed to render.
- ``OUTPUT_ERROR``: the output directory is unsafe or unwritable.
- ``ALREADY_INITIALIZED``: ``init`` found an existing ``blogctl.toml``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"build_site"``, ``"all_files"``...), used to
            pick a renderer.
        data: Operation payload on success.
        warnings: Non-fatal problems, such as a missing profile image.
        error: Set when ``ok`` is False.
        meta: Extra run information; ``telemetry`` holds the span tree.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Shorthand for an ``ok=False`` result; *detail* becomes ``error.detail``."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
