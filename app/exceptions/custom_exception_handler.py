from fastapi.responses import JSONResponse
from app.exceptions.custom_exception import CustomException


def custom_exception_handler(request, exc: CustomException):
    content = {
        "statusCode": exc.status_code,
        "message": exc.message
    }
    if exc.details is not None:
        content["details"] = exc.details

    return JSONResponse(status_code=exc.status_code, content=content)
