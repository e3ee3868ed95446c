import asyncio, json
import openai
from openai import OpenAI
from loguru import logger

from ..errors import ConfigurationError, UpstreamEmptyResponse, UpstreamError, UpstreamUnreachable
from ..settings import Settings
from .prompts import build_messages

MOCK_TOPICS = ["absorption", "distribution", "metabolism", "excretion"]


def check_credential(settings: Settings) -> str:
    key = (settings.NVIDIA_API_KEY or "").strip()
    if not key:
        raise ConfigurationError("NVIDIA_API_KEY not set in environment. Add it to the deployment settings.")
    if settings.API_KEY_PREFIX and not key.startswith(settings.API_KEY_PREFIX):
        raise ConfigurationError(
            f"NVIDIA_API_KEY looks invalid (expected it to start with '{settings.API_KEY_PREFIX}'). "
            "Check the deployment settings."
        )
    return key


def _mock_completion(prompt: str) -> str:
    """Fenced, prose-prefixed JSON so the normalizer's repair path runs offline too."""
    qs = []
    for t in MOCK_TOPICS:
        qs.append({"type": "objective", "question": f"Which process does '{t}' describe?",
                   "options": [t.title(), "Binding", "Filtration", "Secretion"],
                   "answer": t.title(), "explanation": f"{t.title()} is a core pharmacokinetic stage."})
    for t in MOCK_TOPICS:
        qs.append({"type": "subjective", "question": "The pharmacokinetic stage studied here is _______.",
                   "answer": t.upper()})
    for t in MOCK_TOPICS:
        qs.append({"type": "theory", "question": f"Explain {t} in your own words.",
                   "answer": f"{t.title()} is one of the four pharmacokinetic stages.",
                   "keywords": [t, "pharmacokinetics"]})
    for i, q in enumerate(qs, start=1):
        q["id"] = i
    return "Here are your questions:\n```json\n" + json.dumps({"questions": qs}) + "\n```"


def _complete_sync(prompt: str, settings: Settings) -> str:
    if settings.MOCK_MODE:
        return _mock_completion(prompt)

    client = OpenAI(
        api_key=check_credential(settings),
        base_url=settings.NVIDIA_BASE_URL,
        max_retries=0,
        timeout=settings.UPSTREAM_TIMEOUT,
    )
    logger.info(f"[llm] requesting completion model={settings.NVIDIA_MODEL} prompt_chars={len(prompt)}")
    try:
        resp = client.chat.completions.create(
            model=settings.NVIDIA_MODEL,
            messages=build_messages(prompt),
            temperature=settings.TEMPERATURE,
            top_p=settings.TOP_P,
            max_tokens=settings.MAX_TOKENS,
            stream=False,
        )
    except openai.APIConnectionError as e:
        logger.error(f"[llm] upstream unreachable: {e}")
        raise UpstreamUnreachable() from e
    except openai.APIStatusError as e:
        body = e.response.text if e.response is not None else getattr(e, "message", str(e))
        logger.error(f"[llm] upstream status {e.status_code}: {body[:300]}")
        raise UpstreamError(e.status_code, body) from e

    text = (resp.choices[0].message.content or "") if resp.choices else ""
    if not text.strip():
        raise UpstreamEmptyResponse()
    logger.info(f"[llm] completion received chars={len(text)}")
    return text


async def complete(prompt: str, settings: Settings) -> str:
    if not settings.MOCK_MODE:
        check_credential(settings)
    return await asyncio.to_thread(_complete_sync, prompt, settings)
