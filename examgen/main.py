from __future__ import annotations

from fastapi import FastAPI, Request
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import BadRequest
from .settings import settings
from .services.emit import cors_headers, error_response
from .routers import questions

# ---------- logging ----------
logger.remove()
logger.add(
    lambda msg: print(msg, end=""),
    format="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {message}",
    level=settings.LOG_LEVEL,
)

# ---------- app ----------
app = FastAPI(title="ExamGen API", version="1.0.0")

# ---------- CORS ----------
# Preflights are answered by the routes themselves; this only fills in
# the headers on responses that did not come through the emitter.
@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    if "access-control-allow-methods" not in response.headers:
        response.headers.update(cors_headers(settings.ALLOW_ORIGINS, request.headers.get("origin")))
    return response

# unknown routes etc. still answer with {error} + CORS headers
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    cors = cors_headers(settings.ALLOW_ORIGINS, request.headers.get("origin"))
    return error_response(BadRequest(str(exc.detail), status_code=exc.status_code), cors)

# ---------- health ----------
@app.get("/health")
def health():
    return {
        "ok": True,
        "mock": settings.MOCK_MODE,
        "model": settings.NVIDIA_MODEL,
        "min_questions": settings.MIN_QUESTIONS,
        "max_content_chars": settings.MAX_CONTENT_CHARS,
    }

# ---------- routers ----------
app.include_router(questions.router, tags=["questions"])
