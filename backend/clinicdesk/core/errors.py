"""
Exception handlers translating failures into the API's JSON error bodies.

  400  {"message": ..., "errors": [{"field", "message", "type"}]}
  404  {"message": ...}
  500  {"message": "Internal server error"}
"""
import logging
from typing import Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..storage import StorageError, UnknownPatientError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Resource segment of /api/<resource>/... -> message used for 400 responses
INVALID_DATA_MESSAGES = {
    "patients": "Invalid patient data",
    "consultations": "Invalid consultation data",
}
LOCATION_ROOTS = ("body", "query", "path")


def _invalid_data_message(request: Request) -> str:
    parts = [p for p in request.url.path.split("/") if p]
    if len(parts) >= 2 and parts[0] == "api":
        return INVALID_DATA_MESSAGES.get(parts[1], "Invalid request data")
    return "Invalid request data"


def _field_name(loc) -> str:
    parts = list(loc)
    if len(parts) > 1 and parts[0] in LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def format_validation_errors(errors) -> List[Dict[str, str]]:
    return [
        {
            "field": _field_name(err.get("loc", ())),
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        }
        for err in errors
    ]


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": _invalid_data_message(request),
            "errors": format_validation_errors(exc.errors()),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unknown_patient_handler(request: Request, exc: UnknownPatientError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": _invalid_data_message(request),
            "errors": [
                {
                    "field": "patientId",
                    "message": f"Patient {exc.patient_id} does not exist",
                    "type": "foreign_key",
                }
            ],
        },
    )


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(UnknownPatientError, unknown_patient_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
