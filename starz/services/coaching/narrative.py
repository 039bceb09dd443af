"""Coaching brief for a ranked recommendation list, OpenAI-backed with a template fallback."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, TypeVar

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, Field, ValidationError

from starz.config import settings
from starz.models.lead import LeadRecord
from starz.models.recommendation import RecommendationCandidate
from starz.services.coaching.errors import CoachingProviderError, CoachingValidationError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

DEFAULT_SYSTEM_PROMPT = (
    "You are a sales coach for a digital marketing agency. Given a lead and a ranked list of "
    "coaching tips, return JSON only with keys: summary (string), opener (string), "
    "next_steps (list of up to 3 strings)."
)
MAX_BRIEF_TIPS = 5


class CoachingBrief(BaseModel):
    """Short narrative wrapped around the ranked tips."""

    summary: str
    opener: str
    next_steps: list[str] = Field(default_factory=list)
    generated_by: str


class OpenAIChatClient(Protocol):
    """Minimal contract for OpenAI text generation."""

    def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        model: str,
        temperature: float,
    ) -> str:
        ...


class OpenAIResponseClient(OpenAIChatClient):
    """Thin wrapper around the official OpenAI Responses API."""

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("OPENAI_API_KEY is required to coach in online mode.")
        self._client = OpenAI(api_key=api_key)

    def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        model: str,
        temperature: float,
    ) -> str:
        response = self._client.responses.create(
            model=model,
            temperature=temperature,
            input=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return _extract_response_text(response)


def _extract_response_text(response: Any) -> str:
    """Normalize OpenAI responses across SDK versions."""
    output_text = getattr(response, "output_text", None)
    if isinstance(output_text, str) and output_text.strip():
        return output_text.strip()

    text_chunks: list[str] = []
    for item in getattr(response, "output", None) or []:
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text":
                text_chunks.append(getattr(content, "text", ""))
    if text_chunks:
        return "".join(text_chunks).strip()

    choices = getattr(response, "choices", None) or []
    if choices:
        content = getattr(choices[0].message, "content", "")
        if isinstance(content, str) and content.strip():
            return content.strip()

    raise CoachingProviderError(
        "OpenAI response did not include text output.",
        code="502_OPENAI_UPSTREAM",
    )


@dataclass(frozen=True)
class NarrativeContext:
    """Configuration bundle for the narrator."""

    mode: str
    system_prompt: str
    model: str
    temperature: float


class CoachingNarrator:
    """Writes a coaching brief with OpenAI when online, from templates otherwise."""

    def __init__(
        self,
        *,
        client: OpenAIChatClient | None = None,
        context: NarrativeContext | None = None,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._context = context or _build_context()
        self._retry_attempts = retry_attempts
        self._retry_backoff_seconds = retry_backoff_seconds
        self._sleep = sleep

    @property
    def mode(self) -> str:
        return self._context.mode

    def brief(self, lead: LeadRecord, recommendations: list[RecommendationCandidate]) -> CoachingBrief:
        if self._context.mode == "online":
            return self._brief_with_openai(lead, recommendations)
        return self._brief_from_template(lead, recommendations)

    def _brief_from_template(
        self, lead: LeadRecord, recommendations: list[RecommendationCandidate]
    ) -> CoachingBrief:
        who = lead.name or lead.company or "this lead"
        if not recommendations:
            return CoachingBrief(
                summary=f"No coaching tips cleared the confidence bar for {who}.",
                opener="Introduce yourself and ask permission to continue the conversation.",
                next_steps=["Gather more qualification information"],
                generated_by="fixture-template",
            )
        top = recommendations[0]
        return CoachingBrief(
            summary=(
                f"{len(recommendations)} coaching tip(s) for {who}. "
                f"Start with '{top.title}' ({top.priority} priority, {top.confidence}% confidence)."
            ),
            opener=top.action_items[0] if top.action_items else top.message,
            next_steps=[tip.title for tip in recommendations[:3]],
            generated_by="fixture-template",
        )

    def _brief_with_openai(
        self, lead: LeadRecord, recommendations: list[RecommendationCandidate]
    ) -> CoachingBrief:
        client = self._ensure_client()
        user_prompt = _render_user_prompt(lead, recommendations)

        def _invoke() -> CoachingBrief:
            try:
                response_text = client.generate(
                    system_prompt=self._context.system_prompt,
                    user_prompt=user_prompt,
                    model=self._context.model,
                    temperature=self._context.temperature,
                )
            except OpenAIError as exc:
                code = "429_RATE_LIMIT" if getattr(exc, "status_code", None) == 429 else "502_OPENAI_UPSTREAM"
                message = getattr(exc, "message", str(exc))
                raise CoachingProviderError(f"OpenAI request failed: {message}", code=code) from exc

            try:
                payload = _parse_json_payload(response_text)
            except ValueError as exc:
                logger.error("coaching.brief.parse_error", extra={"lead_id": lead.id, "mode": self._context.mode})
                raise CoachingValidationError("Model response was not valid JSON.", code="502_OPENAI_UPSTREAM") from exc

            try:
                return CoachingBrief(
                    summary=str(payload["summary"]).strip(),
                    opener=str(payload["opener"]).strip(),
                    next_steps=[str(step).strip() for step in payload.get("next_steps", [])][:3],
                    generated_by=self._context.model,
                )
            except (KeyError, TypeError, ValidationError) as exc:
                raise CoachingValidationError(
                    "Model response missing required fields.",
                    code="502_OPENAI_UPSTREAM",
                ) from exc

        return self._execute_with_retry(_invoke)

    def _execute_with_retry(self, func: Callable[[], _T]) -> _T:
        """Retry helper with exponential backoff; only rate limits are retried."""
        delay = self._retry_backoff_seconds
        for attempt in range(1, self._retry_attempts + 1):
            try:
                return func()
            except CoachingProviderError as exc:
                if attempt == self._retry_attempts or exc.code != "429_RATE_LIMIT":
                    raise
                logger.warning(
                    "coaching.brief.retry",
                    extra={"attempt": attempt, "code": exc.code, "delay_seconds": delay},
                )
                self._sleep(delay)
                delay *= 2
        raise CoachingProviderError("Retry attempts exhausted.", code="502_OPENAI_UPSTREAM")

    def _ensure_client(self) -> OpenAIChatClient:
        if self._client:
            return self._client
        if not settings.openai_api_key:
            raise CoachingProviderError(
                "OPENAI_API_KEY is required for online coaching briefs.",
                code="502_OPENAI_UPSTREAM",
            )
        self._client = OpenAIResponseClient(settings.openai_api_key)
        return self._client


def _build_context() -> NarrativeContext:
    prompt_path = Path(settings.coaching_system_prompt_path).expanduser()
    if prompt_path.exists():
        system_prompt = prompt_path.read_text(encoding="utf-8").strip()
    else:
        logger.warning("coaching.brief.prompt_missing", extra={"path": str(prompt_path)})
        system_prompt = DEFAULT_SYSTEM_PROMPT
    return NarrativeContext(
        mode=settings.coaching_mode.lower(),
        system_prompt=system_prompt,
        model=settings.coaching_model,
        temperature=settings.coaching_temperature,
    )


def _render_user_prompt(lead: LeadRecord, recommendations: list[RecommendationCandidate]) -> str:
    tips = "\n".join(
        f"- [{tip.priority}/{tip.confidence}] {tip.title}: {tip.message}"
        for tip in recommendations[:MAX_BRIEF_TIPS]
    )
    return (
        "Write a coaching brief for this lead and return JSON only.\n"
        f"Name: {lead.name or 'Unknown'}\n"
        f"Company: {lead.company or 'Unknown'}\n"
        f"Lead source: {lead.lead_source or 'Unknown'}\n"
        f"Budget: {lead.budget if lead.budget is not None else 'Unknown'}\n"
        f"Notes: {lead.notes or 'None'}\n"
        f"Ranked tips:\n{tips or '- None'}\n"
    )


def _parse_json_payload(raw_text: str) -> dict[str, Any]:
    """Best-effort JSON decoding that tolerates code fences or prose."""
    candidate = raw_text.strip()
    if candidate.startswith("```"):
        candidate = "\n".join(line for line in candidate.splitlines() if not line.strip().startswith("```")).strip()
    if candidate.startswith("{") and candidate.endswith("}"):
        return json.loads(candidate)
    start = candidate.find("{")
    end = candidate.rfind("}")
    if start != -1 and end != -1 and end > start:
        return json.loads(candidate[start : end + 1])
    raise ValueError("Response did not contain JSON object.")


_NARRATOR_INSTANCE: CoachingNarrator | None = None


def get_narrator() -> CoachingNarrator:
    """Singleton accessor used by API routes."""
    global _NARRATOR_INSTANCE  # noqa: PLW0603
    if _NARRATOR_INSTANCE is None:
        _NARRATOR_INSTANCE = CoachingNarrator()
    return _NARRATOR_INSTANCE
