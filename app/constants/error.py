# constants/errors.py
class ERROR:
    INTERNAL_ERROR = "Something went wrong. Please try again later"
    UNAUTHORIZED = "Authentication failed. Token is missing or invalid."
    ACCESS_DENIED = "Access denied"

    FORM_NOT_FOUND = "Form not found"
    FORM_NOT_FOUND_OR_DENIED = "Form not found or access denied"
    DUPLICATE_TABLE_NAME = "A form with this table name already exists"
    INVALID_TABLE_NAME = "Invalid tableName. Use snake_case format (lowercase, numbers, underscores)"
    INVALID_FIELD_NAME = "Invalid field name '{name}'. Use snake_case format (lowercase, numbers, underscores)"
    IDENTIFIER_TOO_LONG = "'{name}' is longer than {limit} characters"
    DUPLICATE_FIELD_NAME = "Field name '{name}' is used more than once"
    RESERVED_FIELD_NAME = "Field name '{name}' is reserved"
    INVALID_FIELD_PATTERN = "Field '{name}' has an invalid validation pattern"
    TABLE_CREATION_FAILED = "Failed to create database table for form"
    TABLE_IS_REGISTERED = "Table '{name}' belongs to a registered form"
    RESERVED_TABLE_NAME = "tableName '{name}' is reserved by the application"
    TABLE_ALREADY_EXISTS = "A table named '{name}' already exists in the database"
    SUBMISSION_INVALID = "Validation failed"
    AI_GENERATION_FAILED = "Failed to generate form. Please try again."
    AI_UNPARSEABLE = "Could not parse form from AI response"

    # Messages for request body validation, looked up as REQUIRED_<FIELD>
    REQUIRED_TITLE = "title is required."
    REQUIRED_DESCRIPTION = "description is required."
    REQUIRED_FIELDS = "fields must contain at least one field."
    REQUIRED_TABLENAME = "tableName is required."
    REQUIRED_FORMID = "formId is required."
    REQUIRED_DATA = "data must be an object of field values."
    REQUIRED_PROMPT = "prompt is required."
