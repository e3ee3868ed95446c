from fastapi import APIRouter, Depends, Request
from loguru import logger

from ..errors import ExamGenError, InternalError
from ..services.emit import cors_headers, error_response, preflight_response, success_response
from ..services.llm import complete
from ..services.parse import normalize_completion
from ..services.prompts import build_prompt
from ..services.validate import validate_request
from ..settings import Settings, get_settings

router = APIRouter()

PATHS = ("/generate-questions", "/.netlify/functions/generate-questions")
ACCEPTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def generate_questions(request: Request, settings: Settings = Depends(get_settings)):
    """
    content → prompt → one completion → normalized question set.
    Every outcome, success or failure, leaves through the emitter.
    """
    cors = cors_headers(settings.ALLOW_ORIGINS, request.headers.get("origin"))
    if request.method == "OPTIONS":
        return preflight_response(cors)

    try:
        req = validate_request(
            request.method, request.headers.get("content-type"), await request.body(), settings
        )
        prompt = build_prompt(
            req.content, req.mode,
            max_chars=settings.MAX_CONTENT_CHARS, audience=settings.EXAM_AUDIENCE,
        )
        logger.info(f"[questions] mode={req.mode or 'exam'} content_chars={len(req.content)}")

        raw = await complete(prompt, settings)
        result = normalize_completion(
            raw, min_questions=settings.MIN_QUESTIONS, require_answer=settings.REQUIRE_ANSWER
        )
        logger.info(f"[questions] returning total={result.total}")
        return success_response(result, cors)

    except ExamGenError as e:
        logger.warning(f"[questions] {type(e).__name__} ({e.status_code}): {e.message}")
        return error_response(e, cors)
    except Exception as e:
        logger.exception(f"[questions] unexpected error: {e}")
        return error_response(InternalError(), cors)


for _path in PATHS:
    router.add_api_route(_path, generate_questions, methods=ACCEPTED_METHODS)
