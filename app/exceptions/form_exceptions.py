from typing import List
from app.constants.error import ERROR
from app.exceptions.custom_exception import CustomException


class InvalidInputError(CustomException):
    def __init__(self, message: str):
        super().__init__(status_code=400, message=message)


class InvalidIdentifierError(InvalidInputError):
    def __init__(self, message: str, identifier=None):
        self.identifier = identifier
        super().__init__(message)


class FormValidationError(CustomException):
    """A submission broke one or more field rules; carries every violation."""

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__(status_code=400, message=ERROR.SUBMISSION_INVALID, details=self.violations)


class NotFoundError(CustomException):
    def __init__(self, message: str = ERROR.FORM_NOT_FOUND):
        super().__init__(status_code=404, message=message)


class DuplicateTableNameError(CustomException):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(status_code=409, message=ERROR.DUPLICATE_TABLE_NAME)


class TableProvisioningError(CustomException):
    def __init__(self, table_name: str, reason: str):
        self.table_name = table_name
        self.reason = reason
        super().__init__(status_code=500, message=ERROR.TABLE_CREATION_FAILED)


class WebhookError(CustomException):
    def __init__(self, message: str = ERROR.AI_GENERATION_FAILED):
        super().__init__(status_code=502, message=message)
