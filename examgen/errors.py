class ExamGenError(Exception):
    """Base for every failure that ends a request with an `{error}` payload."""

    status_code = 500
    message = "Server error."

    def __init__(self, message: str | None = None, *, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequest(ExamGenError):
    status_code = 400
    message = "Bad request."


class ConfigurationError(ExamGenError):
    status_code = 500
    message = "Server is misconfigured."


# ---------- upstream (completion endpoint) ----------
class UpstreamUnreachable(ExamGenError):
    status_code = 502
    message = "Could not reach the AI service. Please try again."


class UpstreamError(ExamGenError):
    status_code = 502

    def __init__(self, upstream_status: int | None, detail: str = ""):
        self.upstream_status = upstream_status
        self.detail = (detail or "")[:300]
        msg = f"AI service error ({upstream_status or 'unknown'})"
        if self.detail:
            msg += f": {self.detail}"
        super().__init__(msg)


class UpstreamEmptyResponse(ExamGenError):
    status_code = 502
    message = "The AI service returned an empty response. Please try again."


# ---------- completion content ----------
class MalformedCompletion(ExamGenError):
    message = "Could not read the AI response as JSON. Please try again."


class MissingQuestionsField(ExamGenError):
    message = 'The AI response had no "questions" list. Please try again.'


class InsufficientQuestions(ExamGenError):
    def __init__(self, count: int, minimum: int):
        self.count = count
        self.minimum = minimum
        super().__init__(
            f"Only {count} usable questions were generated (need at least {minimum}). "
            "Try again with more study content."
        )


class InternalError(ExamGenError):
    message = "Server error. Please try again."
