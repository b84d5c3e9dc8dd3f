"""Error Taxonomy — typed, categorized errors for every classified failure mode.

Invariants:
    - Every error has a message (str), http_status (int), code (str | None),
      category (ErrorCategory) and severity (ErrorSeverity)
    - Construction never raises; errors are plain values until something raises them
    - to_response() produces the uniform envelope {success: false, error, code?}
    - 4xx errors have status "fail", everything else "error"

Design Decisions:
    - Single hierarchy with HttpError base: the boundary handler recognizes the whole family
    - Errors are Exception subclasses so FastAPI dependencies can raise them, but
      operations return them inside Err(...) instead of raising (see core/outcome.py)
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity — drives the log level at the boundary."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Violation:
    """A single field-level validation failure."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class HttpError(Exception):
    """Base error for every failure the API knows how to report."""

    def __init__(
        self,
        message: str = "Something went wrong",
        http_status: int = 500,
        code: str | None = "INTERNAL_SERVER_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        severity: ErrorSeverity | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.code = code
        self.category = category
        self.severity = severity or (
            ErrorSeverity.WARNING if http_status < 500 else ErrorSeverity.CRITICAL
        )

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.http_status < 500 else "error"

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        body: dict = {"success": False, "error": self.message}
        if self.code:
            body["code"] = self.code
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(HttpError):
    """Input failed one or more schema rules."""
    def __init__(
        self,
        message: str = "Validation failed",
        violations: list[Violation] | None = None,
    ):
        super().__init__(
            message, 400, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
        )
        self.violations = list(violations or [])

    @classmethod
    def from_violations(cls, violations: list[Violation]) -> "ValidationError":
        summary = ", ".join(f"{v.field}: {v.message}" for v in violations)
        return cls(f"Validation failed: {summary}", violations)

    def to_response(self) -> dict:
        body = super().to_response()
        if self.violations:
            body["details"] = [v.to_dict() for v in self.violations]
        return body


class NoUpdatesError(HttpError):
    """Update request supplied no mutable fields."""
    def __init__(self, message: str = "No fields to update"):
        super().__init__(
            message, 400, "NO_UPDATES", ErrorCategory.BUSINESS_RULE,
        )


class NotFoundError(HttpError):
    """Requested resource does not exist."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message, 404, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
        )


class ConflictError(HttpError):
    """Write would violate a uniqueness rule."""
    def __init__(self, message: str = "Conflict"):
        super().__init__(
            message, 409, "CONFLICT", ErrorCategory.CONFLICT,
        )


class RateLimitError(HttpError):
    """Client exceeded its request budget."""
    def __init__(self, message: str = "Too many requests, please try again later."):
        super().__init__(
            message, 429, "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
        )
