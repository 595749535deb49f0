from typing import Optional
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from app.config.database_config import Base, engine
from app.config.env_config import settings
from app.models import form_model  # noqa: F401  registers the forms tables on Base
from app.exceptions import CustomException, custom_exception_handler, validation_exception_handler
from app.config.logger_config import setup_logging
from app.utils.logger_utils import log_info
from app.routes.form_router import form_controller

# Initialize logging
setup_logging()

app = FastAPI(
    title="School ERP Forms API",
    swagger_ui_parameters={
        "persistAuthorization": True
    }
)

log_info(context="APP_STARTUP", message="FastAPI application started")


@app.get("/health")
def server_life_check():
    return {"statusCode": 200, "data": "Your server is running successfully"}


Base.metadata.create_all(bind=engine)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(CustomException, custom_exception_handler)

app.include_router(form_controller, prefix="/forms", tags=["Forms"])

origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def run_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Serve the app with uvicorn, falling back to HOST/PORT from settings."""
    import uvicorn

    resolved_host = host or settings.HOST
    resolved_port = port if port is not None else settings.PORT
    uvicorn.run(app, host=resolved_host, port=resolved_port)


if __name__ == "__main__":
    run_server()
