from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.config.database_config import get_db
from app.constants.messages import MESSAGE
from app.constants.utils import ROLES
from app.middleware.auth_middleware import require_roles
from app.schema.form_schema import FormCreate, FormGenerate, FormSubmit
from app.schema.user_schema import UserData
from app.services.form_service import get_form, list_forms_by_owner, serialize_public_form
from app.services.form_lifecycle_service import create_form, delete_form, drop_orphaned_table, find_orphaned_tables
from app.services.submission_service import get_responses, submit_response
from app.services.n8n_service import generate_form_draft
from app.utils.logger_utils import handle_route_error

form_controller = APIRouter()

form_manager = require_roles(*ROLES.FORM_MANAGERS)
admin_only = require_roles(ROLES.ADMIN)


@form_controller.post("/create", response_model=dict, status_code=status.HTTP_201_CREATED)
def handle_create_form(data: FormCreate, user: UserData = Depends(form_manager), db: Session = Depends(get_db)):
    try:
        response = create_form(db, data, user)
        return {"statusCode": 201, "message": MESSAGE.FORM_CREATED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="POST /forms/create")


@form_controller.get("/list", response_model=dict)
def handle_list_forms(user: UserData = Depends(form_manager), db: Session = Depends(get_db)):
    try:
        response = list_forms_by_owner(db, user.id)
        return {"statusCode": 200, "message": MESSAGE.FORMS_FOUND, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /forms/list")


@form_controller.post("/submit", response_model=dict, status_code=status.HTTP_201_CREATED)
def handle_submit_form(data: FormSubmit, db: Session = Depends(get_db)):
    try:
        response = submit_response(db, data.formId, data.data)
        return {"statusCode": 201, "message": MESSAGE.RESPONSE_SUBMITTED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="POST /forms/submit")


@form_controller.post("/generate", response_model=dict)
async def handle_generate_form(data: FormGenerate, user: UserData = Depends(form_manager)):
    try:
        draft = await generate_form_draft(data.prompt, data.sessionId or f"user-{user.id}")
        return {"statusCode": 200, "message": MESSAGE.FORM_GENERATED, "data": draft}
    except Exception as e:
        handle_route_error(error=e, context="POST /forms/generate")


@form_controller.get("/orphans", response_model=dict)
def handle_find_orphans(user: UserData = Depends(admin_only), db: Session = Depends(get_db)):
    try:
        response = find_orphaned_tables(db)
        return {"statusCode": 200, "message": MESSAGE.ORPHANS_FOUND, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /forms/orphans")


@form_controller.delete("/orphans/{table_name}", response_model=dict)
def handle_drop_orphan(table_name: str, user: UserData = Depends(admin_only), db: Session = Depends(get_db)):
    try:
        drop_orphaned_table(db, table_name)
        return {"statusCode": 200, "message": MESSAGE.ORPHAN_DROPPED, "data": {"tableName": table_name}}
    except Exception as e:
        handle_route_error(error=e, context="DELETE /forms/orphans")


@form_controller.get("/responses/{form_id}", response_model=dict)
def handle_get_responses(form_id: str, user: UserData = Depends(form_manager), db: Session = Depends(get_db)):
    try:
        response = get_responses(db, form_id, user.id)
        return {"statusCode": 200, "message": MESSAGE.RESPONSES_FOUND, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /forms/responses")


@form_controller.delete("/delete/{form_id}", response_model=dict)
def handle_delete_form(form_id: str, user: UserData = Depends(form_manager), db: Session = Depends(get_db)):
    try:
        delete_form(db, form_id, user)
        return {"statusCode": 200, "message": MESSAGE.FORM_DELETED, "data": []}
    except Exception as e:
        handle_route_error(error=e, context="DELETE /forms/delete")


# Public, declared last so it does not shadow the static paths above
@form_controller.get("/{form_id}", response_model=dict)
def handle_get_form(form_id: str, db: Session = Depends(get_db)):
    try:
        form = get_form(db, form_id)
        return {"statusCode": 200, "message": MESSAGE.FORM_FOUND, "data": serialize_public_form(form)}
    except Exception as e:
        handle_route_error(error=e, context="GET /forms/{form_id}")
