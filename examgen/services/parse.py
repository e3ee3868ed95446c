import json, re
from dataclasses import dataclass
from typing import Any, Callable, Union

from loguru import logger

from ..errors import InsufficientQuestions, MalformedCompletion, MissingQuestionsField
from ..schemas import ObjectiveQuestion, QuestionSet, SubjectiveQuestion, TheoryQuestion

PLACEHOLDER_OPTIONS = ["Option A", "Option B", "Option C", "Option D"]
DEFAULT_EXPLANATION = "See your study materials for details."
MAX_KEYWORDS = 10
SNIPPET_CHARS = 200

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```\s*$")


@dataclass(frozen=True)
class Discard:
    """Returned instead of a record when an element cannot be salvaged."""
    reason: str


Coerced = Union[ObjectiveQuestion, SubjectiveQuestion, TheoryQuestion, Discard]


def _clean(s: str) -> str:
    s = _LEADING_FENCE.sub("", s or "", count=1)
    return _TRAILING_FENCE.sub("", s, count=1).strip()


def parse_completion_json(raw: str) -> Any:
    """Fence-strip, parse, then fall back to the outermost {...} slice."""
    cleaned = _clean(raw)
    try:
        return json.loads(cleaned)
    except ValueError:
        pass

    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start != -1 and start < end:
        try:
            return json.loads(cleaned[start:end + 1])
        except ValueError:
            pass

    logger.warning(f"[normalize] unparseable completion ({len(raw or '')} chars): {cleaned[:SNIPPET_CHARS]!r}")
    raise MalformedCompletion()


# ---------- field helpers ----------
def _text(v: Any) -> str:
    # numeric answers and options are kept; bools and None are not
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v).strip()
    return v.strip() if isinstance(v, str) else ""

def _strings(v: Any) -> list[str]:
    if not isinstance(v, list):
        return []
    return [s for s in (_text(x) for x in v) if s]

def _fold(s: str) -> str:
    return " ".join(s.split()).casefold()


def _clamp_options(raw_options: Any) -> list[str]:
    usable = _strings(raw_options)
    if len(usable) < 2:
        return list(PLACEHOLDER_OPTIONS)
    usable = usable[:4]
    # slot label first (Option D for the 4th), then any label not already used
    labels = PLACEHOLDER_OPTIONS[len(usable):] + PLACEHOLDER_OPTIONS[:len(usable)]
    fill = [p for p in labels if p not in usable]
    return usable + fill[:4 - len(usable)]


def _match_answer(answer: str, options: list[str]) -> str:
    if answer in options:
        return answer
    folded = _fold(answer)
    for opt in options:
        if _fold(opt) == folded:
            return opt
    return options[0]


# ---------- per-kind coercers ----------
def coerce_objective(item: dict, qid: int, *, require_answer: bool = True) -> Coerced:
    question, answer = _text(item.get("question")), _text(item.get("answer"))
    if not question:
        return Discard("missing question")
    if not answer and require_answer:
        return Discard("missing answer")
    options = _clamp_options(item.get("options"))
    return ObjectiveQuestion(
        id=qid,
        question=question,
        options=options,
        answer=_match_answer(answer, options),
        explanation=_text(item.get("explanation")) or DEFAULT_EXPLANATION,
    )

def coerce_subjective(item: dict, qid: int, *, require_answer: bool = True) -> Coerced:
    question, answer = _text(item.get("question")), _text(item.get("answer"))
    if not question:
        return Discard("missing question")
    if not answer and require_answer:
        return Discard("missing answer")
    return SubjectiveQuestion(id=qid, question=question, answer=answer.lower())

def coerce_theory(item: dict, qid: int, *, require_answer: bool = True) -> Coerced:
    question, answer = _text(item.get("question")), _text(item.get("answer"))
    if not question:
        return Discard("missing question")
    if not answer and require_answer:
        return Discard("missing answer")
    return TheoryQuestion(
        id=qid,
        question=question,
        answer=answer,
        keywords=_strings(item.get("keywords"))[:MAX_KEYWORDS],
    )

COERCERS: dict[str, Callable[..., Coerced]] = {
    "objective": coerce_objective,
    "subjective": coerce_subjective,
    "theory": coerce_theory,
}


def coerce_question(item: Any, qid: int, *, require_answer: bool = True) -> Coerced:
    """Classify one raw element and hand it to its kind's coercer.

    A missing type tag discards the element; a present but unknown tag is
    treated as theory.
    """
    if not isinstance(item, dict):
        return Discard("not an object")
    kind = _text(item.get("type")).lower()
    if not kind:
        return Discard("missing type")
    coercer = COERCERS.get(kind, coerce_theory)
    return coercer(item, qid, require_answer=require_answer)


def normalize_completion(raw: str, *, min_questions: int = 10, require_answer: bool = True) -> QuestionSet:
    """
    Turn raw completion text into a QuestionSet.

    Raises MalformedCompletion, MissingQuestionsField or InsufficientQuestions.
    Individual bad elements are dropped, never raised.
    """
    data = parse_completion_json(raw)
    items = data.get("questions") if isinstance(data, dict) else None
    if not isinstance(items, list):
        logger.warning(f"[normalize] no questions list; top-level type={type(data).__name__}")
        raise MissingQuestionsField()

    kept = []
    dropped: dict[str, int] = {}
    for item in items:
        rec = coerce_question(item, len(kept) + 1, require_answer=require_answer)
        if isinstance(rec, Discard):
            dropped[rec.reason] = dropped.get(rec.reason, 0) + 1
            continue
        kept.append(rec)

    if dropped:
        logger.info(f"[normalize] kept {len(kept)}/{len(items)}; dropped {dropped}")
    if len(kept) < min_questions:
        raise InsufficientQuestions(len(kept), min_questions)

    return QuestionSet(questions=kept, total=len(kept))
