import os
import tempfile
from pathlib import Path

# Settings are read at import time, so point them at a scratch database first
TEST_DB_DIR = tempfile.mkdtemp(prefix="forms-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(TEST_DB_DIR) / 'forms.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_TO_FILE"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from app.main import app
from app.config.database_config import Base, SessionLocal, engine
from app.config.env_config import settings
from app.constants.utils import ROLES
from app.models.form_model import Form, FormResponse
from app.schema.user_schema import UserData
from app.services.schema_compiler import compile_drop_table
from app.utils.auth_utils import generate_jwt


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def clean_database():
    yield
    with engine.begin() as conn:
        conn.execute(FormResponse.__table__.delete())
        conn.execute(Form.__table__.delete())
        for name in inspect(conn).get_table_names():
            if name not in Base.metadata.tables:
                conn.execute(compile_drop_table(name))


@pytest.fixture
def auth_headers():
    """Factory for bearer headers as issued by the identity service."""

    def _make(user_id: str = "teacher-1", role: str = ROLES.TEACHER) -> dict:
        token = generate_jwt(
            {"id": user_id, "email": f"{user_id}@school.test", "name": user_id, "user_role": role},
            expire_minutes=15,
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def teacher():
    return UserData(id="teacher-1", email="teacher-1@school.test", name="teacher-1", exp=0, user_role=ROLES.TEACHER)


@pytest.fixture
def contact_form():
    return {
        "title": "Parent contact details",
        "description": "Collected at the start of term",
        "tableName": "contact_2024",
        "fields": [
            {"name": "email", "label": "email", "type": "email", "required": True},
            {
                "name": "age",
                "label": "age",
                "type": "number",
                "required": False,
                "validation": {"min": 0, "max": 120},
            },
            {"name": "joined_on", "label": "Joined on", "type": "date", "required": False},
            {"name": "consent", "label": "Consent", "type": "checkbox", "required": False},
            {
                "name": "grade",
                "label": "Grade",
                "type": "select",
                "required": False,
                "options": ["Grade 1", "Grade 2"],
            },
        ],
    }
