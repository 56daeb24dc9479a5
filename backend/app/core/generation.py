# backend/app/core/generation.py

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import requests

from backend.app.core.errors import GenerationFailure
from backend.app.core.llm_response import extract_completion_text
from backend.app.core.results import Err, Result, attempt

logger = logging.getLogger(__name__)

FALLBACK_BULLET_LIMIT = 5
_BULLET_TEMPLATE = "- Delivered measurable impact with {keyword} through cross-functional execution and KPI-focused initiatives"
_GENERIC_BULLET = "- Delivered measurable impact through cross-functional execution and KPI-focused initiatives"


@dataclass(frozen=True)
class GeneratorConfig:
    provider: str = "api"
    api_url: str = ""
    api_key: str = ""
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1000
    connect_timeout: float = 30.0
    read_timeout: float = 60.0

    @property
    def remote_configured(self) -> bool:
        return bool(self.api_url) and bool(self.api_key)


class ContentGenerator(ABC):
    """Writes ATS bullets and a cover letter for one resume / job description pair."""

    @abstractmethod
    def generate_bullets(self, resume_text: str, job_description: str, keywords: Sequence[str]) -> str:
        ...

    @abstractmethod
    def generate_cover_letter(self, resume_text: str, job_description: str, keywords: Sequence[str]) -> str:
        ...


class FallbackContentGenerator(ContentGenerator):
    """Template content. No I/O, same output for the same keywords."""

    def generate_bullets(self, resume_text: str = "", job_description: str = "", keywords: Sequence[str] = ()) -> str:
        lines = [_BULLET_TEMPLATE.format(keyword=kw) for kw in list(keywords)[:FALLBACK_BULLET_LIMIT]]
        if not lines:
            lines.append(_GENERIC_BULLET)
        return "\n".join(lines)

    def generate_cover_letter(self, resume_text: str = "", job_description: str = "", keywords: Sequence[str] = ()) -> str:
        return (
            "Dear Hiring Manager,\n\n"
            "I am excited to apply for this role. My experience and skills align well with the "
            f"requirements, especially in areas like {', '.join(keywords)}. "
            "I am eager to contribute to your team and help drive success.\n\n"
            "Thank you for considering my application.\n\n"
            "Best regards,\n"
            "Candidate"
        )


class ApiContentGenerator(ContentGenerator):
    """
    Calls an OpenAI-compatible chat completion endpoint.

    Every failure mode (missing configuration, transport errors, non-2xx,
    non-JSON or HTML bodies, unexpected shapes) is logged and answered with
    FallbackContentGenerator output; nothing is raised to the caller.
    """

    def __init__(self, config: GeneratorConfig, http: Any = None, fallback: Optional[ContentGenerator] = None):
        self.config = config
        # anything with a requests-style post(); build_content_generator passes a Session
        self.http = http or requests
        self.fallback = fallback or FallbackContentGenerator()

        logger.info(
            "ApiContentGenerator configured: url_set=%s key_set=%s model=%s",
            bool(config.api_url), bool(config.api_key), config.model,
        )

    # ---------- Public API ----------
    def generate_bullets(self, resume_text: str, job_description: str, keywords: Sequence[str]) -> str:
        logger.info("Generating ATS bullet points with %d keywords", len(keywords))
        prompt = (
            "You are an expert resume writer. Generate exactly 5 ATS-optimized resume bullet points "
            "based on the provided resume and job description. Each bullet point should:\n"
            "- Start with a strong action verb\n"
            "- Include quantifiable achievements when possible\n"
            f"- Incorporate these keywords naturally: {', '.join(keywords)}\n"
            "- Be concise and impactful (1-2 lines each)\n\n"
            f"Resume:\n{resume_text}\n\n"
            f"Job Description:\n{job_description}\n\n"
            "Return ONLY the 5 bullet points, one per line, each starting with a hyphen (-)."
        )
        text = self._generate_or_fallback(
            prompt, lambda: self.fallback.generate_bullets(resume_text, job_description, keywords)
        )
        logger.info("Bullet points ready - length=%d", len(text))
        return text

    def generate_cover_letter(self, resume_text: str, job_description: str, keywords: Sequence[str]) -> str:
        logger.info("Generating tailored cover letter with %d keywords", len(keywords))
        prompt = (
            "You are an expert cover letter writer. Generate a professional, concise cover letter "
            "(3-4 paragraphs) for this job application. The cover letter should:\n"
            "- Demonstrate enthusiasm for the role\n"
            "- Highlight relevant experience from the resume\n"
            f"- Naturally incorporate these keywords: {', '.join(keywords)}\n"
            "- Be professional yet personable\n\n"
            f"Resume:\n{resume_text}\n\n"
            f"Job Description:\n{job_description}\n\n"
            "Return ONLY the cover letter text, no additional commentary."
        )
        text = self._generate_or_fallback(
            prompt, lambda: self.fallback.generate_cover_letter(resume_text, job_description, keywords)
        )
        logger.info("Cover letter ready - length=%d", len(text))
        return text

    # ---------- Remote call ----------
    def _generate_or_fallback(self, prompt: str, fallback) -> str:
        if not self.config.remote_configured:
            logger.warning(
                "LLM API URL or key not configured (url_set=%s, key_set=%s), using fallback content",
                bool(self.config.api_url), bool(self.config.api_key),
            )
            return fallback()

        result = self.complete(prompt)
        if isinstance(result, Err):
            logger.warning("Falling back to default content: %s", result.reason)
            return fallback()
        return result.value

    def complete(self, prompt: str) -> Result[str]:
        """One chat completion; Ok(text) or Err(reason)."""
        result = attempt(self._request_completion, prompt)
        if isinstance(result, Err) and not isinstance(result.error, GenerationFailure):
            logger.error(
                "LLM API call failed: %s: %s", type(result.error).__name__, result.reason,
                exc_info=result.error,
            )
        return result

    def _request_completion(self, prompt: str) -> str:
        payload = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }
        logger.info("Calling LLM API at %s", self.config.api_url)
        logger.debug("Prompt length: %d characters", len(prompt))

        resp = self.http.post(
            self.config.api_url,
            json=payload,
            headers=headers,
            timeout=(self.config.connect_timeout, self.config.read_timeout),
        )
        body = resp.text or ""
        content_type = resp.headers.get("Content-Type") or "none"
        logger.info("LLM API response status: %s", resp.status_code)

        if not 200 <= resp.status_code < 300:
            logger.warning("LLM API returned non-2xx status %s - body: %s", resp.status_code, trim_for_log(body, 500))
            raise GenerationFailure(f"Non-2xx status {resp.status_code}")

        if "application/json" not in content_type.lower():
            if body.strip().startswith("<"):
                # misconfigured endpoints tend to redirect to an HTML login page
                logger.error("LLM API returned HTML (Content-Type: %s) - body: %s", content_type, trim_for_log(body, 1000))
                raise GenerationFailure(f"HTML response (Content-Type: {content_type})")
            logger.error("LLM API returned non-JSON Content-Type: %s - body: %s", content_type, trim_for_log(body, 500))
            raise GenerationFailure(f"Non-JSON Content-Type: {content_type}")

        try:
            data = json.loads(body)
        except ValueError as e:
            logger.error("Failed to parse JSON response - body: %s", trim_for_log(body, 1000))
            raise GenerationFailure(f"Invalid JSON body: {e}") from e

        try:
            content = extract_completion_text(data)
        except GenerationFailure:
            logger.error("Unexpected response shape - body: %s", trim_for_log(body, 1000))
            raise
        if not content:
            raise GenerationFailure("Response contained no text")

        logger.info("Extracted content from LLM response - length=%d", len(content))
        logger.debug("Content preview: %s", trim_for_log(content, 100))
        return content


def build_content_generator(config: GeneratorConfig, http: Any = None) -> ContentGenerator:
    """Pick the one generation strategy this deployment runs with."""
    provider = (config.provider or "").strip().lower()
    if provider == "api":
        return ApiContentGenerator(config, http=http or requests.Session())
    if provider == "fallback":
        logger.info("LLM_PROVIDER=fallback, remote generation disabled")
        return FallbackContentGenerator()
    raise ValueError(f"Unsupported LLM_PROVIDER: {config.provider!r} (expected 'api' or 'fallback')")


def trim_for_log(text: Optional[str], limit: int) -> str:
    if not text or limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "...(truncated)"
