"""
Create and delete flows for forms and their provisioned tables.

Creating a form is a two-step saga: provision the table, then register the
form. DDL autocommits on most engines, so a failed registration is undone by
dropping the table again. Deleting removes the registry side first and drops
the table on a best-effort basis; leftovers show up in `find_orphaned_tables`.
"""
from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.config.database_config import Base
from app.config.env_config import settings
from app.models.form_model import Form
from app.schema.form_schema import FormCreate
from app.schema.user_schema import UserData
from app.exceptions import CustomException, DuplicateTableNameError, InvalidIdentifierError, TableProvisioningError
from app.constants.error import ERROR
from app.services.form_service import (
    create_form_record, delete_form_record, find_form_by_table_name, serialize_form
)
from app.services.schema_compiler import (
    compile_create_table, compile_drop_table, render_ddl, validate_form_schema
)
from app.utils.identifier_utils import validate_identifier
from app.utils.logger_utils import handle_service_error, log_info, log_warning, log_database_operation


def execute_ddl(db: Session, statement) -> None:
    log_database_operation("DDL", render_ddl(statement, db.get_bind().dialect))
    try:
        db.connection().execute(statement)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def is_application_table(table_name: str) -> bool:
    return table_name in Base.metadata.tables


def table_exists(db: Session, table_name: str) -> bool:
    try:
        return inspect(db.get_bind()).has_table(table_name)
    except SQLAlchemyError as e:
        handle_service_error(e, "table_exists", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))


def shareable_link(form_id: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/form/{form_id}"


def create_form(db: Session, data: FormCreate, user: UserData) -> dict:
    table_name = data.tableName

    validate_form_schema(table_name, data.fields)

    if is_application_table(table_name):
        raise InvalidIdentifierError(ERROR.RESERVED_TABLE_NAME.format(name=table_name), identifier=table_name)

    if find_form_by_table_name(db, table_name):
        raise DuplicateTableNameError(table_name)

    # IF NOT EXISTS would silently adopt an unregistered table, and delete would later drop it
    if table_exists(db, table_name):
        raise CustomException(status_code=409, message=ERROR.TABLE_ALREADY_EXISTS.format(name=table_name))

    try:
        execute_ddl(db, compile_create_table(table_name, data.fields))
    except SQLAlchemyError as e:
        handle_service_error(e, "create_form.provision_table", TableProvisioningError(table_name, str(e)))
    log_info(context="FORM_CREATE", message=f"Dynamic table created: {table_name}")

    try:
        form = create_form_record(db, data, user)
    except DuplicateTableNameError:
        # Lost a race with a concurrent create; the table belongs to the winner
        raise
    except Exception as e:
        drop_table_quietly(db, table_name, context="create_form.compensate")
        handle_service_error(e, "create_form.register", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))

    log_info(context="FORM_CREATE", message=f"Form created: {form.id} by user {user.id}")

    result = serialize_form(form)
    result["shareableLink"] = shareable_link(form.id)
    return result


def delete_form(db: Session, form_id: str, user: UserData) -> None:
    table_name = delete_form_record(db, form_id, user.id)
    drop_table_quietly(db, table_name, context="delete_form")
    log_info(context="FORM_DELETE", message=f"Form deleted: {form_id} by user {user.id}")


def drop_table_quietly(db: Session, table_name: str, context: str) -> bool:
    """Drop a provisioned table, logging instead of raising on failure."""
    if is_application_table(table_name):
        log_warning(context=context.upper(), message=f"Refusing to drop application table {table_name}")
        return False
    try:
        execute_ddl(db, compile_drop_table(table_name))
        log_info(context=context.upper(), message=f"Dynamic table dropped: {table_name}")
        return True
    except SQLAlchemyError as e:
        log_warning(context=context.upper(), message=f"Failed to drop dynamic table {table_name}: {e}")
        return False


def find_orphaned_tables(db: Session) -> dict:
    """
    Compare the database's tables with the form registry.

    orphanedTables: tables that are neither application tables nor provisioned
    for a registered form (e.g. left behind by a crash mid-saga).
    missingTables: registered forms whose provisioned table does not exist.
    """
    try:
        existing = set(inspect(db.get_bind()).get_table_names())
        registered = {
            table_name: form_id
            for form_id, table_name in db.query(Form.id, Form.table_name).all()
        }
    except SQLAlchemyError as e:
        handle_service_error(e, "find_orphaned_tables", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))

    application_tables = set(Base.metadata.tables)
    orphaned = sorted(
        name for name in existing
        if name not in application_tables and name not in registered
    )
    missing = [
        {"formId": form_id, "tableName": table_name}
        for table_name, form_id in sorted(registered.items())
        if table_name not in existing
    ]

    return {"orphanedTables": orphaned, "missingTables": missing}


def drop_orphaned_table(db: Session, table_name: str) -> None:
    validate_identifier(table_name)

    if is_application_table(table_name) or find_form_by_table_name(db, table_name):
        raise CustomException(status_code=409, message=ERROR.TABLE_IS_REGISTERED.format(name=table_name))

    try:
        execute_ddl(db, compile_drop_table(table_name))
    except SQLAlchemyError as e:
        handle_service_error(e, "drop_orphaned_table", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))

    log_warning(context="RECONCILE", message=f"Orphaned table dropped: {table_name}")
