"""
Compiles form field lists into DDL for the per-form response tables.

Statements are SQLAlchemy DDL elements; executing them is left to the caller's
session so this module never touches a connection.
"""
import re
import uuid
from typing import List
from sqlalchemy import Column, DateTime, MetaData, String, Table, func
from sqlalchemy.schema import CreateTable, DropTable
from app.constants.error import ERROR
from app.exceptions.form_exceptions import InvalidInputError, InvalidIdentifierError
from app.schema.form_schema import FormField
from app.utils.identifier_utils import validate_identifier
from app.utils.type_mapper import map_logical_type

ID_COLUMN = "id"
SUBMITTED_AT_COLUMN = "submitted_at"
RESERVED_COLUMNS = (ID_COLUMN, SUBMITTED_AT_COLUMN)


def validate_form_schema(table_name: str, fields: List[FormField]) -> None:
    """Raise InvalidInputError unless the table name and every field can become storage identifiers."""
    validate_identifier(table_name)

    seen = set()
    for field in fields:
        validate_identifier(field.name, ERROR.INVALID_FIELD_NAME.format(name=field.name))
        if field.name in RESERVED_COLUMNS:
            raise InvalidIdentifierError(ERROR.RESERVED_FIELD_NAME.format(name=field.name), identifier=field.name)
        if field.name in seen:
            raise InvalidInputError(ERROR.DUPLICATE_FIELD_NAME.format(name=field.name))
        seen.add(field.name)

        pattern = field.validation.pattern if field.validation else None
        if pattern:
            try:
                re.compile(pattern)
            except re.error:
                raise InvalidInputError(ERROR.INVALID_FIELD_PATTERN.format(name=field.name))


def build_table(table_name: str, fields: List[FormField]) -> Table:
    columns = [
        Column(ID_COLUMN, String(36), primary_key=True, default=lambda: str(uuid.uuid4())),
    ]
    for field in fields:
        columns.append(Column(field.name, map_logical_type(field.type), nullable=not field.required))
    columns.append(Column(SUBMITTED_AT_COLUMN, DateTime, server_default=func.now(), nullable=False))

    return Table(table_name, MetaData(), *columns)


def compile_create_table(table_name: str, fields: List[FormField]) -> CreateTable:
    validate_form_schema(table_name, fields)
    return CreateTable(build_table(table_name, fields), if_not_exists=True)


def compile_drop_table(table_name: str) -> DropTable:
    validate_identifier(table_name)
    return DropTable(Table(table_name, MetaData()), if_exists=True)


def render_ddl(statement, dialect) -> str:
    return str(statement.compile(dialect=dialect)).strip()
