from app.exceptions.custom_exception import CustomException
from app.exceptions.custom_exception_handler import custom_exception_handler
from app.exceptions.validation_exception_handler import validation_exception_handler
from app.exceptions.form_exceptions import (
    InvalidInputError, InvalidIdentifierError, FormValidationError, NotFoundError,
    DuplicateTableNameError, TableProvisioningError, WebhookError
)

__all__ = [
    "CustomException", "custom_exception_handler", "validation_exception_handler",
    "InvalidInputError", "InvalidIdentifierError", "FormValidationError", "NotFoundError",
    "DuplicateTableNameError", "TableProvisioningError", "WebhookError",
]
