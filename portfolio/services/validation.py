# === portfolio/services/validation.py ===
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from portfolio.core.exceptions import ValidationError
from portfolio.schemas.contact import ContactSubmission
from portfolio.schemas.project import ProjectCreate, ProjectUpdate

T = TypeVar("T", bound=BaseModel)


@dataclass
class ValidationResult(Generic[T]):
    """Either a validated command or the list of field violations."""

    value: Optional[T] = None
    violations: List[Dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def unwrap(self) -> T:
        if self.violations:
            raise ValidationError(self.violations)
        return self.value


def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc) or "body"

def _message(error: dict) -> str:
    if error["type"] == "missing":
        return "is required"
    msg = error.get("msg", "Invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg

def violations_from(exc: PydanticValidationError) -> List[Dict[str, str]]:
    return [
        {"field": _field_name(error["loc"]), "message": _message(error)}
        for error in exc.errors()
    ]

def _validate(model: Type[T], body: Any) -> ValidationResult[T]:
    if not isinstance(body, dict):
        return ValidationResult(violations=[
            {"field": "body", "message": "Request body must be a JSON object"}
        ])
    try:
        return ValidationResult(value=model.model_validate(body))
    except PydanticValidationError as e:
        return ValidationResult(violations=violations_from(e))


def validate_create_project(body: Any) -> ValidationResult[ProjectCreate]:
    return _validate(ProjectCreate, body)

def validate_update_project(body: Any) -> ValidationResult[ProjectUpdate]:
    return _validate(ProjectUpdate, body)

def validate_contact(body: Any) -> ValidationResult[ContactSubmission]:
    return _validate(ContactSubmission, body)
