import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import BlockedPromptException, StopCandidateException

from mindwatch.core.config import Settings, get_settings
from mindwatch.services.exceptions import ModelUnavailable
from mindwatch.services.prompt_builder import PromptSpec

logger = logging.getLogger(__name__)

# Gemini only knows "user" and "model" turns; system text goes to system_instruction.
ROLE_MAP = {"user": "user", "assistant": "model"}


def classify_error(exc: BaseException) -> str:
    """Map an SDK/transport exception to a local error kind."""
    if isinstance(exc, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)):
        return "auth"
    if isinstance(exc, (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)):
        return "rate_limit"
    if isinstance(exc, (google_exceptions.DeadlineExceeded, asyncio.TimeoutError, TimeoutError)):
        return "timeout"
    if isinstance(exc, (BlockedPromptException, StopCandidateException, AttributeError, ValueError, TypeError)):
        return "bad_response"
    if isinstance(exc, google_exceptions.InvalidArgument):
        error_str = str(exc).lower()
        if "api key" in error_str:
            return "auth"
        return "bad_response"
    return "unavailable"


def to_gemini_contents(prompt: PromptSpec) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    system_parts = []
    contents = []
    for turn in prompt.messages:
        if turn.role == "system":
            system_parts.append(turn.content)
            continue
        contents.append({"role": ROLE_MAP[turn.role], "parts": [turn.content]})
    system_instruction = "\n\n".join(system_parts) if system_parts else None
    return system_instruction, contents


def generation_config(prompt: PromptSpec) -> Dict[str, Any]:
    config = {
        "temperature": prompt.temperature,
        "max_output_tokens": prompt.max_tokens,
    }
    if prompt.top_p is not None:
        config["top_p"] = prompt.top_p
    return config


def response_text(response: Any, task: str = "") -> str:
    """Concatenate the text parts of the first candidate.

    An envelope without candidates is a valid, empty reply.
    """
    candidates = response.candidates
    if not candidates:
        return ""
    candidate = candidates[0]
    content = candidate.content
    parts = content.parts if content is not None else []
    text = "".join(part.text for part in parts if getattr(part, "text", None))
    if not text:
        finish_reason = getattr(candidate, "finish_reason", None)
        logger.warning("Model returned no text: task=%s finish_reason=%s",
                       task, getattr(finish_reason, "name", finish_reason))
    return text


class ModelGateway:
    """
    The single door to the Gemini completion API.

    One upstream call per `complete()`, no retries. Every failure leaves as
    ModelUnavailable; provider error shapes never escape this class.
    """
    def __init__(self, settings: Settings):
        self.settings = settings
        self.timeout = settings.model_timeout_seconds

    async def complete(self, prompt: PromptSpec) -> str:
        system_instruction, contents = to_gemini_contents(prompt)
        try:
            model = genai.GenerativeModel(prompt.model, system_instruction=system_instruction)
            response = await model.generate_content_async(
                contents,
                generation_config=generation_config(prompt),
                request_options={"timeout": self.timeout},
            )
            return response_text(response, prompt.task)
        except Exception as e:
            kind = classify_error(e)
            # Content is privacy-sensitive: log the error kind and task only.
            logger.warning("Model call failed: task=%s kind=%s error_type=%s",
                           prompt.task, kind, type(e).__name__)
            raise ModelUnavailable(kind, prompt.task) from e


_gateway: Optional[ModelGateway] = None


def init_gateway(settings: Optional[Settings] = None) -> ModelGateway:
    """Configure the SDK once at startup and build the shared gateway."""
    global _gateway
    settings = settings or get_settings()
    if settings.google_api_key:
        genai.configure(api_key=settings.google_api_key)
    else:
        logger.warning("GOOGLE_API_KEY is not set; AI features will fall back to defaults.")
    _gateway = ModelGateway(settings)
    logger.info("Model gateway ready (primary=%s, fast=%s)",
                settings.primary_model, settings.fast_model)
    return _gateway


def get_gateway() -> ModelGateway:
    if _gateway is None:
        raise RuntimeError("Model gateway is not initialised. Call init_gateway() at startup.")
    return _gateway
