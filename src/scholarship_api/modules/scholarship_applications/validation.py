"""
Candidate Application Validation

validate_application() turns an untyped payload into either a typed
ScholarshipApplicationCreate or a list of field errors. It never raises for
malformed input, so callers decide how a rejection is reported.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from scholarship_api.modules.scholarship_applications.schemas import ScholarshipApplicationCreate

# Assigned by the server; whatever the caller sends for these is discarded
SERVER_ASSIGNED_FIELDS = frozenset({"id", "submissionDate", "submission_date"})


@dataclass(frozen=True)
class FieldError:
    """A single failing field, addressed by its wire path (e.g. guardians[0].telephone)."""

    path: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


@dataclass
class ApplicationValidationResult:
    """Outcome of validate_application: data on success, errors otherwise."""

    data: ScholarshipApplicationCreate | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.data is not None

    @property
    def message(self) -> str:
        return format_validation_message(self.errors)


def format_error_path(loc: Sequence[int | str]) -> str:
    """Render a pydantic error location as a dotted path with [index] segments."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path


def format_validation_message(errors: Sequence[FieldError]) -> str:
    """
    Combine field errors into one human-readable message.

    Example:
        Validation error: GPA must be between 0.00 and 4.00 at "gpa";
        At least one guardian is required at "guardians"
    """
    if not errors:
        return "Validation error"
    parts = [f'{e.message} at "{e.path}"' if e.path else e.message for e in errors]
    return "Validation error: " + "; ".join(parts)


def strip_server_assigned_fields(candidate: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of the candidate without server-assigned keys."""
    return {key: value for key, value in candidate.items() if key not in SERVER_ASSIGNED_FIELDS}


def validate_application(candidate: Any) -> ApplicationValidationResult:
    """
    Validate a candidate application payload.

    Args:
        candidate: Decoded JSON body (anything; non-objects are rejected)

    Returns:
        ApplicationValidationResult with either `data` or `errors` populated
    """
    if not isinstance(candidate, Mapping):
        return ApplicationValidationResult(
            errors=[FieldError(path="", message="Expected an application object")]
        )

    try:
        data = ScholarshipApplicationCreate.model_validate(strip_server_assigned_fields(candidate))
    except ValidationError as e:
        return ApplicationValidationResult(
            errors=[
                FieldError(path=format_error_path(error["loc"]), message=error["msg"])
                for error in e.errors()
            ]
        )

    return ApplicationValidationResult(data=data)
