from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from sqlalchemy import Boolean, Date, Numeric, String, Text
from sqlalchemy.dialects import mysql
from sqlalchemy.types import TypeEngine
from app.schema.form_schema import FieldType

SHORT_TEXT_LENGTH = 255

SHORT_TEXT_TYPES = (FieldType.TEXT, FieldType.SELECT, FieldType.RADIO, FieldType.FILE, FieldType.EMAIL)

TRUTHY_STRINGS = {"true", "on", "yes", "1"}
FALSY_STRINGS = {"false", "off", "no", "0", ""}


def _number_type() -> TypeEngine:
    # MySQL DECIMAL without precision is DECIMAL(10,0) and drops fractions
    return Numeric().with_variant(mysql.DOUBLE(asdecimal=True), "mysql")


def map_logical_type(logical_type) -> TypeEngine:
    """Column type for a field's logical type; unknown types are stored as unbounded text."""
    if logical_type in SHORT_TEXT_TYPES:
        return String(SHORT_TEXT_LENGTH)
    if logical_type == FieldType.TEXTAREA:
        return Text()
    if logical_type == FieldType.NUMBER:
        return _number_type()
    if logical_type == FieldType.DATE:
        return Date()
    if logical_type == FieldType.CHECKBOX:
        return Boolean()
    return Text()


def is_empty_value(value) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def to_number(value) -> Decimal:
    """Parse a submitted number; raises ValueError for booleans, non-numeric or non-finite input."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise ValueError(f"not a number: {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"not a number: {value!r}")
    if not number.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return number


def coerce_value(logical_type, value):
    """
    Convert a submitted JSON value into what the provisioned column stores.

    Raises ValueError or TypeError when the value cannot be represented in
    the column.
    """
    if logical_type == FieldType.CHECKBOX:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in TRUTHY_STRINGS:
                return True
            if lowered in FALSY_STRINGS:
                return False
            raise ValueError(f"not a checkbox value: {value!r}")
        return bool(value)

    if is_empty_value(value):
        return None

    if logical_type == FieldType.NUMBER:
        return to_number(value)
    if logical_type == FieldType.DATE:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        # accept full ISO timestamps as well as plain dates
        return date.fromisoformat(str(value).strip()[:10])

    if isinstance(value, (list, tuple)):
        value = ", ".join(str(item) for item in value)
    text_value = str(value)
    if logical_type in SHORT_TEXT_TYPES and len(text_value) > SHORT_TEXT_LENGTH:
        raise ValueError(f"value longer than {SHORT_TEXT_LENGTH} characters")
    return text_value
