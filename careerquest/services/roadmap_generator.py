"""
Skill roadmap generation

One chat-completion call to an OpenAI-compatible endpoint (Gemini by default),
JSON extracted from the free-form answer and validated against SkillRoadmap.
Callers use generate_with_fallback(): any failure, of any kind, is replaced by
the deterministic mock roadmap. No partial results, no retries.
"""
import asyncio
import json
from typing import Optional

import pydantic
from openai import AsyncOpenAI

from careerquest.config import Settings
from careerquest.errors import GenerationError
from careerquest.schemas.roadmap import RoadmapRequest, RoadmapResponse, SkillRoadmap
from careerquest.services.roadmap_mock import mock_skill_roadmap
from careerquest.utils.logger import get_logger
from careerquest.utils.metrics import inc, track_duration

logger = get_logger("services.roadmap_generator")


def extract_json_object(text: str) -> Optional[str]:
    """
    First balanced {...} block in ``text``.

    Braces inside JSON strings (and escaped quotes) do not count toward the
    nesting depth. Returns None when no complete block exists.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_structured_payload(text: str) -> SkillRoadmap:
    """Pull the roadmap object out of model output that may be wrapped in prose or code fences"""
    candidate = extract_json_object(text or "")
    if candidate is None:
        raise GenerationError("Failed to extract valid JSON from the API response")

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Roadmap JSON could not be parsed: {e.msg}") from e

    try:
        return SkillRoadmap.model_validate(payload)
    except pydantic.ValidationError as e:
        raise GenerationError(f"Roadmap JSON does not match the expected structure ({e.error_count()} errors)") from e


class RoadmapGenerator:
    """Builds the roadmap prompt, calls the generative backend and parses the answer"""

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self.model = settings.gemini_model
        self.client = client
        if self.client is None and settings.generation_enabled:
            self.client = AsyncOpenAI(
                api_key=settings.gemini_api_key,
                base_url=settings.gemini_base_url,
                timeout=settings.generation_timeout_seconds,
                max_retries=0,
            )

    def build_prompt(self, request: RoadmapRequest) -> str:
        career_details = json.dumps(request.model_dump(), indent=2)
        return f"""You are a career development expert specializing in creating personalized skill development roadmaps.

Please analyze the career details below and create a comprehensive skill development roadmap for someone pursuing this career.

Career Details:
{career_details}

Please respond with ONLY a JSON object (no explanations, preambles, or additional text) that follows this structure:

{{
  "careerTitle": "The career title",
  "skillNodes": [
    {{
      "id": "skill-1",
      "title": "Skill name",
      "description": "Brief description of the skill and why it's important",
      "timeframe": "0-3 months",
      "resources": [
        {{
          "name": "Resource name",
          "url": "Resource URL"
        }}
      ],
      "difficulty": "Beginner" | "Intermediate" | "Advanced"
    }}
  ]
}}

Create 8-10 skill nodes total, organized in a logical progression from fundamental to advanced skills.
Make sure skills build upon one another where appropriate.
The roadmap should cover both technical and soft skills required for the career.
Provide realistic timeframes for each skill (0-3 months, 3-6 months, 6-12 months, 1-2 years).
For resources, include a mix of online courses, books, and practice opportunities.
Make sure the JSON is valid and properly formatted.
Return ONLY the JSON object with no additional text."""

    async def mock_roadmap(self, career_title: str) -> SkillRoadmap:
        if self.settings.roadmap_mock_delay_seconds > 0:
            await asyncio.sleep(self.settings.roadmap_mock_delay_seconds)
        return mock_skill_roadmap(career_title)

    async def generate_skill_roadmap(self, request: RoadmapRequest) -> SkillRoadmap:
        """
        Generate a roadmap with the AI backend.

        Raises GenerationError for malformed envelopes or unparsable output;
        transport errors from the SDK propagate unchanged.
        """
        if self.client is None:
            logger.warning("Using mock roadmap because no generation API key is configured")
            return await self.mock_roadmap(request.title)

        prompt = self.build_prompt(request)
        logger.info(f"Requesting roadmap for '{request.title}'", extra={"career_code": request.code})

        async with track_duration("gemini", "roadmap"):
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.2,
                top_p=0.95,
                max_tokens=2048,
            )

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise GenerationError("Invalid response structure from the generation API") from e
        if not isinstance(text, str) or not text.strip():
            raise GenerationError("Invalid response structure from the generation API: empty content")

        logger.debug(f"Generation API text response: {text[:2000]}")
        return parse_structured_payload(text)

    async def generate_with_fallback(self, request: RoadmapRequest) -> RoadmapResponse:
        """Always returns a usable roadmap; the mock replaces any AI failure"""
        if self.client is None:
            return RoadmapResponse(roadmap=await self.mock_roadmap(request.title), source="mock")

        try:
            roadmap = await self.generate_skill_roadmap(request)
            inc("roadmap.ai")
            return RoadmapResponse(roadmap=roadmap, source="ai")
        except Exception as e:
            logger.warning(
                f"Roadmap generation failed, using mock roadmap: {type(e).__name__}: {e}",
                extra={"career_code": request.code, "error_type": type(e).__name__},
            )
            inc("roadmap.fallback")
            return RoadmapResponse(roadmap=await self.mock_roadmap(request.title), source="mock")
