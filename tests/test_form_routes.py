import json

from sqlalchemy import inspect, text

from app.config.database_config import engine
from app.constants.utils import ROLES
from app.models.form_model import FormResponse


def table_exists(name: str) -> bool:
    return name in inspect(engine).get_table_names()


def create(client, headers, payload):
    response = client.post("/forms/create", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateForm:

    def test_creates_definition_and_table(self, client, auth_headers, contact_form):
        response = client.post("/forms/create", json=contact_form, headers=auth_headers())

        assert response.status_code == 201
        body = response.json()
        assert body["statusCode"] == 201
        form = body["data"]
        assert form["tableName"] == "contact_2024"
        assert form["createdBy"] == "teacher-1"
        assert form["shareableLink"].endswith(f"/form/{form['id']}")
        assert [field["name"] for field in form["fields"]] == ["email", "age", "joined_on", "consent", "grade"]
        assert table_exists("contact_2024")

    def test_missing_top_level_fields(self, client, auth_headers, contact_form):
        del contact_form["tableName"]
        response = client.post("/forms/create", json=contact_form, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["details"][0]["message"] == "tableName is required."

    def test_empty_field_list(self, client, auth_headers, contact_form):
        contact_form["fields"] = []
        response = client.post("/forms/create", json=contact_form, headers=auth_headers())
        assert response.status_code == 400

    def test_invalid_table_name(self, client, auth_headers, contact_form):
        contact_form["tableName"] = "Contact-2024"
        response = client.post("/forms/create", json=contact_form, headers=auth_headers())

        assert response.status_code == 400
        assert "snake_case" in response.json()["message"]
        assert not table_exists("Contact-2024")

    def test_table_name_longer_than_64_characters(self, client, auth_headers, contact_form):
        contact_form["tableName"] = "t" * 65
        response = client.post("/forms/create", json=contact_form, headers=auth_headers())

        assert response.status_code == 400
        assert "longer than 64 characters" in response.json()["message"]
        assert not table_exists("t" * 65)

    def test_application_table_name_is_reserved(self, client, auth_headers, contact_form):
        contact_form["tableName"] = "form_responses"
        response = client.post("/forms/create", json=contact_form, headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["message"] == "tableName 'form_responses' is reserved by the application"
        assert client.get("/forms/list", headers=auth_headers()).json()["data"] == []
        assert table_exists("form_responses")

    def test_existing_unregistered_table_is_not_adopted(self, client, auth_headers, contact_form):
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE contact_2024 (id VARCHAR(36) PRIMARY KEY)"))

        response = client.post("/forms/create", json=contact_form, headers=auth_headers())

        assert response.status_code == 409
        assert response.json()["message"] == "A table named 'contact_2024' already exists in the database"
        assert client.get("/forms/list", headers=auth_headers()).json()["data"] == []
        assert table_exists("contact_2024")

    def test_non_finite_validation_bounds(self, client, auth_headers, contact_form):
        contact_form["fields"][1]["validation"] = {"min": 0, "max": float("nan")}
        response = client.post(
            "/forms/create",
            content=json.dumps(contact_form),
            headers={**auth_headers(), "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "fields.1.validation.max"
        assert not table_exists("contact_2024")

    def test_invalid_field_name_creates_nothing(self, client, auth_headers, contact_form):
        contact_form["fields"].append({"name": "Phone Number", "label": "Phone", "type": "text"})
        response = client.post("/forms/create", json=contact_form, headers=auth_headers())

        assert response.status_code == 400
        assert "Phone Number" in response.json()["message"]
        assert not table_exists("contact_2024")
        assert client.get("/forms/list", headers=auth_headers()).json()["data"] == []

    def test_duplicate_table_name(self, client, auth_headers, contact_form):
        create(client, auth_headers(), contact_form)

        other = dict(contact_form, title="Another form")
        response = client.post("/forms/create", json=other, headers=auth_headers("teacher-2"))

        assert response.status_code == 409
        assert response.json()["message"] == "A form with this table name already exists"

    def test_requires_authentication(self, client, contact_form):
        response = client.post("/forms/create", json=contact_form)
        assert response.status_code == 401

        response = client.post("/forms/create", json=contact_form, headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_requires_form_manager_role(self, client, auth_headers, contact_form):
        response = client.post("/forms/create", json=contact_form, headers=auth_headers("student-1", ROLES.STUDENT))
        assert response.status_code == 403

    def test_admin_can_create(self, client, auth_headers, contact_form):
        response = client.post("/forms/create", json=contact_form, headers=auth_headers("admin-1", ROLES.ADMIN))
        assert response.status_code == 201


class TestListAndGet:

    def test_lists_only_own_forms_with_counts(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)
        create(client, auth_headers("teacher-2"), dict(contact_form, tableName="other_form"))
        client.post("/forms/submit", json={"formId": form["id"], "data": {"email": "a@b.co"}})
        client.post("/forms/submit", json={"formId": form["id"], "data": {"email": "c@d.co"}})

        forms = client.get("/forms/list", headers=auth_headers()).json()["data"]

        assert len(forms) == 1
        assert forms[0]["id"] == form["id"]
        assert forms[0]["responseCount"] == 2

    def test_public_definition_hides_internals(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)

        response = client.get(f"/forms/{form['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert set(data) == {"id", "title", "description", "fields", "createdAt"}
        assert data["fields"] == form["fields"]

    def test_unknown_form(self, client):
        assert client.get("/forms/does-not-exist").status_code == 404


class TestSubmit:

    def test_round_trip(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)
        payload = {
            "email": "parent@school.test",
            "age": 41,
            "joined_on": "2024-04-01",
            "consent": True,
            "grade": "Grade 2",
        }

        response = client.post("/forms/submit", json={"formId": form["id"], "data": payload})

        assert response.status_code == 201
        submitted = response.json()["data"]
        assert set(submitted) == {"id", "formId", "submittedAt"}
        assert submitted["formId"] == form["id"]

        responses = client.get(f"/forms/responses/{form['id']}", headers=auth_headers()).json()["data"]
        assert len(responses) == 1
        assert responses[0]["id"] == submitted["id"]
        assert responses[0]["data"] == payload

    def test_projection_row_written(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)
        payload = {"email": "parent@school.test", "age": "12.5", "consent": "on"}

        client.post("/forms/submit", json={"formId": form["id"], "data": payload})

        with engine.connect() as conn:
            rows = conn.execute(text("SELECT email, age, consent, grade FROM contact_2024")).mappings().all()
        assert len(rows) == 1
        assert rows[0]["email"] == "parent@school.test"
        assert float(rows[0]["age"]) == 12.5
        assert bool(rows[0]["consent"]) is True
        assert rows[0]["grade"] is None

    def test_validation_failure_lists_every_violation(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)

        response = client.post(
            "/forms/submit", json={"formId": form["id"], "data": {"email": "not-an-email", "age": 200}}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["details"] == ["email must be a valid email", "age must be at most 120"]
        assert client.get("/forms/list", headers=auth_headers()).json()["data"][0]["responseCount"] == 0

    def test_unknown_form(self, client):
        response = client.post("/forms/submit", json={"formId": "missing", "data": {"email": "a@b.co"}})
        assert response.status_code == 404

    def test_missing_data(self, client):
        response = client.post("/forms/submit", json={"formId": "missing"})
        assert response.status_code == 400


class TestOwnership:

    def test_other_users_cannot_see_responses(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)
        client.post("/forms/submit", json={"formId": form["id"], "data": {"email": "a@b.co"}})

        response = client.get(f"/forms/responses/{form['id']}", headers=auth_headers("teacher-2"))

        assert response.status_code == 404
        assert response.json()["message"] == "Form not found or access denied"

    def test_other_users_cannot_delete(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)

        response = client.delete(f"/forms/delete/{form['id']}", headers=auth_headers("teacher-2"))

        assert response.status_code == 404
        assert client.get(f"/forms/{form['id']}").status_code == 200
        assert table_exists("contact_2024")

    def test_not_owned_matches_not_found(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)

        not_owned = client.get(f"/forms/responses/{form['id']}", headers=auth_headers("teacher-2"))
        missing = client.get("/forms/responses/missing", headers=auth_headers("teacher-2"))

        assert not_owned.status_code == missing.status_code == 404
        assert not_owned.json() == missing.json()


class TestDelete:

    def test_cascades_responses_and_drops_table(self, client, auth_headers, contact_form, db):
        form = create(client, auth_headers(), contact_form)
        for index in range(3):
            client.post("/forms/submit", json={"formId": form["id"], "data": {"email": f"p{index}@school.test"}})

        response = client.delete(f"/forms/delete/{form['id']}", headers=auth_headers())

        assert response.status_code == 200
        assert client.get(f"/forms/responses/{form['id']}", headers=auth_headers()).status_code == 404
        assert client.get(f"/forms/{form['id']}").status_code == 404
        assert db.query(FormResponse).filter(FormResponse.form_id == form["id"]).count() == 0
        assert not table_exists("contact_2024")

    def test_table_name_is_reusable_after_delete(self, client, auth_headers, contact_form):
        form = create(client, auth_headers(), contact_form)
        client.delete(f"/forms/delete/{form['id']}", headers=auth_headers())

        response = client.post("/forms/create", json=contact_form, headers=auth_headers())
        assert response.status_code == 201


def test_responses_are_newest_first(client, auth_headers, contact_form):
    form = create(client, auth_headers(), contact_form)
    ids = [
        client.post("/forms/submit", json={"formId": form["id"], "data": {"email": f"p{i}@school.test"}})
        .json()["data"]["id"]
        for i in range(3)
    ]

    responses = client.get(f"/forms/responses/{form['id']}", headers=auth_headers()).json()["data"]

    assert [item["id"] for item in responses] == list(reversed(ids))


class TestReconciliationRoutes:

    def test_admin_only(self, client, auth_headers):
        assert client.get("/forms/orphans", headers=auth_headers()).status_code == 403
        assert client.get("/forms/orphans").status_code == 401

    def test_report_and_drop(self, client, auth_headers, contact_form):
        create(client, auth_headers(), contact_form)
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE abandoned_survey (id VARCHAR(36) PRIMARY KEY)"))
        admin = auth_headers("admin-1", ROLES.ADMIN)

        report = client.get("/forms/orphans", headers=admin).json()["data"]
        assert report == {"orphanedTables": ["abandoned_survey"], "missingTables": []}

        assert client.delete("/forms/orphans/contact_2024", headers=admin).status_code == 409
        assert client.delete("/forms/orphans/abandoned_survey", headers=admin).status_code == 200
        assert not table_exists("abandoned_survey")
