"""Schema Validation — validates raw input maps against named schemas.

Invariants:
    - PURE: no IO, no async, no side effects
    - Never fail-fast: every field rule is evaluated and all violations are collected
    - Violations keep the schema's field declaration order
    - Unknown fields are stripped silently; defaults are applied on success
    - Returns Ok(model) or Err(ValidationError) with a non-empty violations list

Design Decisions:
    - Pydantic models are the rule sets; this module adapts their errors
      to the Violation shape and the wording in MESSAGES, falling back to
      the pydantic message for anything unmapped
"""

from typing import Any, Mapping

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from profile_service.core.errors import ValidationError, Violation
from profile_service.core.outcome import Err, Ok, Outcome
from profile_service.schemas.user import MESSAGES, SCHEMAS


def validate_input(schema_name: str, raw: Mapping[str, Any] | None) -> Outcome[BaseModel]:
    """Validate raw against the named schema. KeyError on an unknown schema name."""
    schema = SCHEMAS[schema_name]
    try:
        return Ok(schema.model_validate({} if raw is None else raw))
    except PydanticValidationError as exc:
        return Err(ValidationError.from_violations(to_violations(exc.errors())))


def to_violations(errors: list[dict]) -> list[Violation]:
    """Convert Pydantic error dicts to Violations (dotted field paths)."""
    return [
        Violation(
            field=".".join(str(loc) for loc in e["loc"]) or "body",
            message=_message(e),
        )
        for e in errors
    ]


def _message(error: dict) -> str:
    field = str(error["loc"][-1]) if error["loc"] else ""
    if message := MESSAGES.get((field, error["type"])):
        return message
    # Pydantic prefixes custom validator messages with "Value error, "
    return error["msg"].removeprefix("Value error, ")
