import re
from typing import Any, Dict, List, Optional
from app.schema.form_schema import FieldType, FormField
from app.utils.type_mapper import is_empty_value, to_number

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _check_email(field: FormField, value) -> Optional[str]:
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
        return f"{field.display_name} must be a valid email"
    return None


def _check_number(field: FormField, value) -> Optional[str]:
    try:
        number = to_number(value)
    except ValueError:
        return f"{field.display_name} must be a number"

    rules = field.validation
    if rules and rules.min is not None and number < to_number(rules.min):
        return f"{field.display_name} must be at least {_format_bound(rules.min)}"
    if rules and rules.max is not None and number > to_number(rules.max):
        return f"{field.display_name} must be at most {_format_bound(rules.max)}"
    return None


def _check_text(field: FormField, value) -> Optional[str]:
    rules = field.validation
    if not rules:
        return None

    text_value = value if isinstance(value, str) else str(value)
    if rules.min is not None and len(text_value) < rules.min:
        return f"{field.display_name} must be at least {_format_bound(rules.min)} characters"
    if rules.max is not None and len(text_value) > rules.max:
        return f"{field.display_name} must be at most {_format_bound(rules.max)} characters"
    if rules.pattern and not re.search(rules.pattern, text_value):
        return rules.message or f"{field.display_name} format is invalid"
    return None


TYPE_CHECKS = {
    FieldType.EMAIL.value: _check_email,
    FieldType.NUMBER.value: _check_number,
    FieldType.TEXT.value: _check_text,
    FieldType.TEXTAREA.value: _check_text,
}


def validate_submission(fields: List[FormField], payload: Dict[str, Any]) -> List[str]:
    """
    Check a submission against a form's fields.

    Returns one message per offending field, in field order; an empty list
    means the payload is valid. A missing required value short-circuits the
    type checks for that field.
    """
    violations = []

    for field in fields:
        value = payload.get(field.name)

        if is_empty_value(value):
            if field.required:
                violations.append(f"{field.display_name} is required")
            continue

        check = TYPE_CHECKS.get(field.type)
        if check is None:
            continue

        violation = check(field, value)
        if violation:
            violations.append(violation)

    return violations
