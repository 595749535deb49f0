import re
from app.constants.error import ERROR
from app.exceptions.form_exceptions import InvalidIdentifierError

# Unquoted SQL identifier: lowercase letter first, then lowercase letters, digits or underscores
IDENTIFIER_PATTERN = re.compile(r"[a-z][a-z0-9_]*")

# MySQL's identifier limit, also the width of forms.table_name
MAX_IDENTIFIER_LENGTH = 64


def is_valid_identifier(name) -> bool:
    return (
        isinstance(name, str)
        and len(name) <= MAX_IDENTIFIER_LENGTH
        and IDENTIFIER_PATTERN.fullmatch(name) is not None
    )


def validate_identifier(name, message: str = ERROR.INVALID_TABLE_NAME) -> str:
    """Return `name` unchanged if it is a safe storage identifier, else raise InvalidIdentifierError."""
    if isinstance(name, str) and IDENTIFIER_PATTERN.fullmatch(name) and len(name) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(
            ERROR.IDENTIFIER_TOO_LONG.format(name=name, limit=MAX_IDENTIFIER_LENGTH), identifier=name
        )
    if not is_valid_identifier(name):
        raise InvalidIdentifierError(message, identifier=name)
    return name
