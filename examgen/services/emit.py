from fastapi.responses import JSONResponse, Response

from ..errors import ExamGenError
from ..schemas import ErrorOut, QuestionSet

BASE_CORS_HEADERS = {
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def cors_headers(allow_origins: list[str], origin: str | None = None) -> dict[str, str]:
    """Cross-origin headers for one response.

    "*" in allow_origins answers every caller with "*"; otherwise only a listed
    Origin is echoed back, and an unlisted one gets no Allow-Origin header.
    """
    headers = dict(BASE_CORS_HEADERS)
    if "*" in allow_origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in allow_origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


def success_response(result: QuestionSet, cors: dict[str, str]) -> JSONResponse:
    return JSONResponse(result.model_dump(), status_code=200, headers=cors)


def error_response(err: ExamGenError, cors: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        ErrorOut(error=err.message).model_dump(),
        status_code=err.status_code,
        headers=cors,
    )


def preflight_response(cors: dict[str, str]) -> Response:
    return Response(status_code=200, headers={**cors, "Content-Type": "application/json"})
