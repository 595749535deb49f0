from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import func
from app.models.form_model import Form, FormResponse
from app.schema.form_schema import FormCreate, dump_fields
from app.schema.user_schema import UserData
from app.exceptions import CustomException, DuplicateTableNameError, NotFoundError
from app.constants.error import ERROR
from app.utils.logger_utils import handle_service_error, log_database_operation
import logging

logger = logging.getLogger(__name__)


def serialize_form(form: Form) -> dict:
    return {
        "id": form.id,
        "title": form.title,
        "description": form.description,
        "fields": form.fields,
        "tableName": form.table_name,
        "createdBy": form.created_by,
        "createdAt": form.created_at,
        "updatedAt": form.updated_at,
    }


def serialize_public_form(form: Form) -> dict:
    """Definition as shown to people filling the form: no owner or storage details."""
    return {
        "id": form.id,
        "title": form.title,
        "description": form.description,
        "fields": form.fields,
        "createdAt": form.created_at,
    }


def find_form_by_table_name(db: Session, table_name: str):
    return db.query(Form).filter(Form.table_name == table_name).first()


def create_form_record(db: Session, data: FormCreate, user: UserData) -> Form:
    try:
        new_form = Form(
            title=data.title,
            description=data.description,
            fields=dump_fields(data.fields),
            table_name=data.tableName,
            created_by=user.id,
        )

        db.add(new_form)
        db.commit()
        db.refresh(new_form)

        log_database_operation("INSERT", "forms", {"id": new_form.id, "table_name": new_form.table_name})
        return new_form

    except IntegrityError as e:
        db.rollback()
        # Only the unique table_name can conflict on insert
        logger.warning(f"Duplicate table name on insert '{data.tableName}': {e.orig}")
        raise DuplicateTableNameError(data.tableName)
    except SQLAlchemyError:
        db.rollback()
        raise


def get_form(db: Session, form_id: str) -> Form:
    try:
        form = db.get(Form, form_id)
    except SQLAlchemyError as e:
        handle_service_error(e, "get_form", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))

    if not form:
        raise NotFoundError(ERROR.FORM_NOT_FOUND)
    return form


def get_owned_form(db: Session, form_id: str, owner_id: str) -> Form:
    """Form owned by `owner_id`; absent and not-owned forms are indistinguishable to the caller."""
    try:
        form = (
            db.query(Form)
            .filter(Form.id == form_id, Form.created_by == owner_id)
            .first()
        )
    except SQLAlchemyError as e:
        handle_service_error(e, "get_owned_form", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))

    if not form:
        raise NotFoundError(ERROR.FORM_NOT_FOUND_OR_DENIED)
    return form


def list_forms_by_owner(db: Session, owner_id: str) -> list:
    try:
        rows = (
            db.query(Form, func.count(FormResponse.id))
            .outerjoin(FormResponse, FormResponse.form_id == Form.id)
            .filter(Form.created_by == owner_id)
            .group_by(Form.id)
            .order_by(Form.created_at.desc())
            .all()
        )

        result = []
        for form, response_count in rows:
            item = serialize_form(form)
            item["responseCount"] = response_count
            result.append(item)
        return result

    except SQLAlchemyError as e:
        handle_service_error(e, "list_forms_by_owner", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))


def delete_form_record(db: Session, form_id: str, owner_id: str) -> str:
    """Delete an owned form together with its responses; returns the form's table name."""
    form = get_owned_form(db, form_id, owner_id)
    table_name = form.table_name

    try:
        deleted_responses = (
            db.query(FormResponse)
            .filter(FormResponse.form_id == form.id)
            .delete(synchronize_session=False)
        )
        db.delete(form)
        db.commit()

        log_database_operation("DELETE", "forms", {"id": form_id, "responses": deleted_responses})
        return table_name

    except SQLAlchemyError as e:
        db.rollback()
        handle_service_error(e, "delete_form_record", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))
