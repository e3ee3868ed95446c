QUESTIONS_PER_KIND = 100

SYSTEM_PROMPT = (
    "You are an exam question generator. Return ONLY valid JSON with no extra text, "
    "no markdown and no code fences."
)

REVISION_NOTE = "Cover the full breadth of the content evenly."
EXAM_NOTE = (
    "Prioritise concepts most likely to appear in exams. "
    "Weight questions toward high-yield topics."
)

PROMPT_TEMPLATE = """You are an expert educator. Based on the content below, generate exactly {total} exam-style questions for a {audience}.

FORMAT RULES (you MUST follow exactly):
- Return ONLY valid JSON. No markdown, no code fences, no preamble.
- The JSON object must have a single key "questions" containing an array of {total} objects.

OBJECTIVE ({n} questions):
{{"id": 1, "type": "objective", "question": "...?", "options": ["...", "...", "...", "..."], "answer": "<exact text of the correct option>", "explanation": "..."}}

SUBJECTIVE ({n} questions, fill-in-the-gap):
{{"id": {n2}, "type": "subjective", "question": "The drug _______ is ...", "answer": "<1-5 words>"}}

THEORY ({n} questions, open-ended):
{{"id": {n3}, "type": "theory", "question": "Explain ...", "answer": "<2-5 sentence model answer>", "keywords": ["...", "..."]}}

QUESTION STRATEGY:
{mode_note}
- Questions 1-{n}: objective. Questions {n2}-{n_end2}: subjective. Questions {n3}-{total}: theory.
- All questions must come directly from the provided content.
- Subjective blanks must have one specific, checkable answer.
- Theory questions carry 4-8 keywords a good answer should mention.

CONTENT TO USE:
{content}"""


def mode_note(mode: str | None) -> str:
    return REVISION_NOTE if mode == "revision" else EXAM_NOTE


def build_prompt(content: str, mode: str | None, *, max_chars: int = 12000, audience: str = "student") -> str:
    n = QUESTIONS_PER_KIND
    return PROMPT_TEMPLATE.format(
        total=3 * n, n=n, n2=n + 1, n_end2=2 * n, n3=2 * n + 1,
        audience=audience,
        mode_note=mode_note(mode),
        content=content[:max_chars],
    )


def build_messages(prompt: str) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
