from typing import Any, Dict, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.models.form_model import Form, FormResponse
from app.schema.form_schema import FormField, parse_fields
from app.exceptions import CustomException, FormValidationError
from app.constants.error import ERROR
from app.services.form_service import get_form, get_owned_form
from app.services.schema_compiler import build_table
from app.services.validation_service import validate_submission
from app.utils.type_mapper import coerce_value
from app.utils.logger_utils import handle_service_error, log_info, log_warning, log_database_operation


def serialize_response(response: FormResponse) -> dict:
    return {
        "id": response.id,
        "formId": response.form_id,
        "data": response.data,
        "submittedAt": response.submitted_at,
    }


def submit_response(db: Session, form_id: str, payload: Dict[str, Any]) -> dict:
    """
    Validate and store one submission.

    The FormResponse document is the commit point. The copy in the form's
    provisioned table is written afterwards and its failure is only logged.
    """
    form = get_form(db, form_id)
    fields = parse_fields(form.fields)

    violations = validate_submission(fields, payload)
    if violations:
        raise FormValidationError(violations)

    try:
        response = FormResponse(form_id=form.id, data=payload)
        db.add(response)
        db.commit()
        db.refresh(response)
    except SQLAlchemyError as e:
        db.rollback()
        handle_service_error(e, "submit_response", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))

    result = {
        "id": response.id,
        "formId": response.form_id,
        "submittedAt": response.submitted_at,
    }

    insert_projection_row(db, form, fields, payload, response_id=result["id"])

    log_info(context="FORM_SUBMIT", message=f"Form response submitted: {result['id']} for form {form_id}")
    return result


def insert_projection_row(
    db: Session,
    form: Form,
    fields: List[FormField],
    payload: Dict[str, Any],
    response_id: str,
) -> bool:
    """Best-effort insert into the provisioned table; returns False and logs on failure."""
    form_id = form.id
    table_name = form.table_name
    try:
        row = {
            field.name: coerce_value(field.type, payload[field.name])
            for field in fields
            if field.name in payload
        }
        table = build_table(table_name, fields)
        db.execute(table.insert().values(**row))
        db.commit()

        log_database_operation("INSERT", table_name, {"response_id": response_id})
        return True

    except Exception as e:
        db.rollback()
        error_msg = str(e) if str(e) else e.__class__.__name__
        log_warning(
            context="DEPENDENT_WRITE_FAILURE",
            message=f"form_id={form_id} response_id={response_id} table={table_name}: {error_msg}"
        )
        return False


def get_responses(db: Session, form_id: str, owner_id: str) -> list:
    form = get_owned_form(db, form_id, owner_id)

    try:
        responses = (
            db.query(FormResponse)
            .filter(FormResponse.form_id == form.id)
            .order_by(FormResponse.submitted_at.desc(), FormResponse.id)
            .all()
        )
        return [serialize_response(response) for response in responses]

    except SQLAlchemyError as e:
        handle_service_error(e, "get_responses", CustomException(status_code=500, message=ERROR.INTERNAL_ERROR))
