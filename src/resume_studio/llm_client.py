
# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Client for section-level content suggestions from a Large Language Model.
Supports Google AI Studio (Gemini) and OpenAI.

Each request makes exactly one provider call. Failures never raise: they come
back as an unsuccessful SuggestionResult with a readable message.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from resume_studio.config import Settings
from resume_studio.models import SECTIONS

# Logger is configured in main.py
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Suggestion:
    suggested_content: str
    reasoning: str


@dataclass(frozen=True)
class SuggestionResult:
    """Outcome of a suggestion request."""
    success: bool
    data: Optional[Suggestion] = None
    error: Optional[str] = None


class SuggestionError(Exception):
    """Raised internally when the provider call or its response is unusable."""


PROMPT_TEMPLATE = """
You are an expert resume writer, skilled at tailoring resumes to specific job descriptions.

Based on the provided job description and the current content of the resume section (if any),
suggest optimized content for the resume section. Also provide the reasoning behind the
suggested content. If no current content is provided, generate optimized content from scratch.

Job Description: {jobDescription}
Resume Section: {resumeSection}
Current Content (if any): {currentContent}

Specifically, you must:
- Closely analyze the job description and identify the key skills, experience, and keywords required for the role.
- Rewrite the current content to match the job description as closely as possible.
- Ensure the suggested content is clear, concise, and easy to read.
- Make sure the content is ATS compatible.
- Use industry best practices.

Return ONLY valid JSON in this format:
{{
    "suggestedContent": "The optimized section content",
    "reasoning": "One paragraph explaining the changes"
}}
"""


def build_payload(job_description: str, section: str, current_content: Optional[str] = None) -> dict:
    payload = {"jobDescription": job_description, "resumeSection": section}
    if current_content:
        payload["currentContent"] = current_content
    return payload


class SuggestionClient:
    """
    Abstraction layer over the LLM providers.
    Handles prompted requests for a single resume section.
    """
    def __init__(self, settings: Settings = None):
        self.settings = settings or Settings.from_env()
        self.provider = self.settings.provider
        if not self.settings.api_key:
            logger.warning("No API key found. Suggestions will be unavailable.")

    async def _call_llm(self, prompt: str) -> str:
        """
        Sends one prompt to the configured provider and returns the raw text.
        Raises SuggestionError on any failure.
        """
        # Ensure custom CA bundle is visible to httpx-based SDKs
        self.settings.configure_ssl_env()

        api_key = self.settings.api_key
        if not api_key:
            raise SuggestionError(f"No API key configured for provider '{self.provider}'.")

        try:
            if self.provider == "openai":
                import openai
                client = openai.AsyncOpenAI(api_key=api_key, max_retries=0)
                response = await client.chat.completions.create(
                    model=self.settings.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=0.7,
                )
                return response.choices[0].message.content

            from google import genai
            client = genai.Client(api_key=api_key)
            response = await client.aio.models.generate_content(
                model=self.settings.model,
                contents=prompt,
            )
            return response.text
        except ImportError as e:
            logger.error(f"Missing dependency for provider {self.provider}: {e}")
            raise SuggestionError(f"The {self.provider} SDK is not installed.") from e
        except Exception as e:
            logger.error(f"LLM call failed: {e}")
            raise SuggestionError(str(e)) from e

    async def request_suggestion(self, job_description: str, section: str,
                                 current_content: Optional[str] = None) -> SuggestionResult:
        """
        Suggests optimized content for one resume section.

        Args:
            job_description (str): The pasted job description.
            section (str): One of summary, experience, skills, education.
            current_content (str, optional): The section's current text.

        Returns:
            SuggestionResult: success with data, or failure with a message.
        """
        if section not in SECTIONS:
            return SuggestionResult(success=False, error=f"Failed to get suggestions. Unknown section '{section}'.")

        payload = build_payload(job_description, section, current_content)
        prompt = PROMPT_TEMPLATE.format(
            jobDescription=payload["jobDescription"],
            resumeSection=payload["resumeSection"],
            currentContent=payload.get("currentContent", ""),
        )

        try:
            raw = await self._call_llm(prompt)
            suggestion = self._parse_response(raw)
        except SuggestionError as e:
            return SuggestionResult(success=False, error=f"Failed to get suggestions. {e}")

        logger.info(f"Received suggestion for section '{section}'")
        return SuggestionResult(success=True, data=suggestion)

    def _parse_response(self, raw: Optional[str]) -> Suggestion:
        if not raw:
            raise SuggestionError("The provider returned an empty response.")
        try:
            data = json.loads(self._clean_json(raw))
        except json.JSONDecodeError as e:
            logger.error("Failed to decode LLM response for suggestion")
            logger.debug(f"Raw response: {raw}")
            raise SuggestionError("The provider returned malformed JSON.") from e

        if not isinstance(data, dict) or not isinstance(data.get("suggestedContent"), str):
            raise SuggestionError("The provider response is missing 'suggestedContent'.")
        reasoning = data.get("reasoning")
        return Suggestion(
            suggested_content=data["suggestedContent"],
            reasoning=reasoning if isinstance(reasoning, str) else "",
        )

    def _clean_json(self, text: str) -> str:
        """Helper to strip code fences from LLM output"""
        if "```json" in text:
            text = text.split("```json")[1].split("```")[0]
        elif "```" in text:
            text = text.split("```")[1].split("```")[0]
        return text.strip()
