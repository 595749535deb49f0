from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    FILE = "file"


class FieldValidation(BaseModel):
    """min/max are numeric bounds for number fields, length bounds for text fields."""

    # NaN/Infinity bounds cannot be compared against a submitted value
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None
    message: Optional[str] = None


class FormField(BaseModel):
    """
    Declarative description of one form field.

    The same value drives the provisioned column (type mapper, schema compiler)
    and submission checks (validation service). `type` stays a plain string so
    field types unknown to this service are still accepted and stored as text.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    type: str = FieldType.TEXT.value
    required: bool = False
    placeholder: Optional[str] = None
    options: List[str] = Field(default_factory=list)
    validation: Optional[FieldValidation] = None

    @property
    def display_name(self) -> str:
        return self.label.strip() or self.name


def parse_fields(raw_fields: List[Dict[str, Any]]) -> List[FormField]:
    """Rebuild field descriptors from the JSON stored on a form."""
    return [FormField.model_validate(raw) for raw in raw_fields or []]


def dump_fields(fields: List[FormField]) -> List[Dict[str, Any]]:
    return [field.model_dump(exclude_none=True) for field in fields]


class FormCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    fields: List[FormField] = Field(..., min_length=1)
    tableName: str = Field(..., min_length=1)


class FormSubmit(BaseModel):
    formId: str = Field(..., min_length=1)
    data: Dict[str, Any]


class FormGenerate(BaseModel):
    prompt: str = Field(..., min_length=1)
    sessionId: Optional[str] = None
