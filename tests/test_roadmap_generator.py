import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from careerquest.errors import GenerationError
from careerquest.schemas.roadmap import RoadmapRequest
from careerquest.services.roadmap_generator import (
    RoadmapGenerator,
    extract_json_object,
    parse_structured_payload,
)
from careerquest.services.roadmap_mock import mock_skill_roadmap
from careerquest.utils import metrics
from conftest import FakeGenerationClient


REQUEST = RoadmapRequest(
    code="15-1252.00",
    title="Software Developers",
    description="Develop applications and systems software.",
    interests=["Investigative", "Conventional"],
)

ROADMAP = {
    "careerTitle": "Software Developers",
    "skillNodes": [
        {
            "id": "skill-1",
            "title": "Python {basics}",
            "description": "Variables, \"loops\" and functions",
            "timeframe": "0-3 months",
            "difficulty": "Beginner",
            "resources": [{"name": "Python Tutorial", "url": "https://docs.python.org/3/tutorial/"}],
        },
        {
            "id": "skill-2",
            "title": "Data structures",
            "description": "Lists, maps and trees",
            "timeframe": "3-6 months",
            "difficulty": "Intermediate",
        },
    ],
}


def generator_with(settings, **kwargs):
    fake = FakeGenerationClient(**kwargs)
    return RoadmapGenerator(settings, client=fake), fake.completions


# ========== JSON extraction ==========

def test_extracts_object_from_prose():
    text = 'Sure! Here is your roadmap:\n```json\n{"a": {"b": 1}}\n```\nGood luck {not json}'

    assert extract_json_object(text) == '{"a": {"b": 1}}'


def test_braces_inside_strings_do_not_count():
    payload = '{"title": "use } and { freely", "quote": "say \\"}\\""}'

    assert extract_json_object("prefix " + payload + " suffix") == payload


def test_unbalanced_or_missing_object():
    assert extract_json_object("no json here") is None
    assert extract_json_object('{"open": {"never": "closed"}') is None


def test_parse_full_roadmap_wrapped_in_prose():
    text = "Here you go:\n" + json.dumps(ROADMAP, indent=2) + "\nLet me know!"

    roadmap = parse_structured_payload(text)

    assert roadmap.career_title == "Software Developers"
    assert [n.id for n in roadmap.skill_nodes] == ["skill-1", "skill-2"]
    assert roadmap.skill_nodes[0].title == "Python {basics}"
    assert roadmap.skill_nodes[1].resources is None


@pytest.mark.parametrize("text", [
    "I cannot help with that.",
    '{"careerTitle": "x", "skillNodes": [,]}',
    '{"careerTitle": "x"}',
    '{"careerTitle": "x", "skillNodes": []}',
    '{"careerTitle": "x", "skillNodes": [{"id": "1", "title": "t", "description": "d", '
    '"timeframe": "0-3 months", "difficulty": "Expert"}]}',
])
def test_parse_failures_raise_generation_error(text):
    with pytest.raises(GenerationError):
        parse_structured_payload(text)


def test_numeric_node_ids_become_strings():
    payload = dict(ROADMAP, skillNodes=[dict(ROADMAP["skillNodes"][1], id=3)])

    roadmap = parse_structured_payload(json.dumps(payload))

    assert roadmap.skill_nodes[0].id == "3"


# ========== Generation ==========

def test_prompt_contains_request_details(generator):
    prompt = generator.build_prompt(REQUEST)

    assert '"title": "Software Developers"' in prompt
    assert '"Investigative"' in prompt
    assert "8-10 skill nodes" in prompt
    assert '"careerTitle"' in prompt


async def test_no_api_key_serves_mock(generator):
    assert generator.client is None

    result = await generator.generate_with_fallback(REQUEST)

    assert result.source == "mock"
    assert result.roadmap == mock_skill_roadmap("Software Developers")


async def test_successful_generation(settings):
    generator, completions = generator_with(settings, content="```json\n" + json.dumps(ROADMAP) + "\n```")

    result = await generator.generate_with_fallback(REQUEST)

    assert result.source == "ai"
    assert len(result.roadmap.skill_nodes) == 2
    call = completions.calls[0]
    assert call["model"] == settings.gemini_model
    assert call["temperature"] == 0.2
    assert call["top_p"] == 0.95
    assert call["max_tokens"] == 2048
    assert call["messages"][0]["role"] == "user"
    assert metrics.get_snapshot()["counters"]["roadmap.ai"] == 1


async def test_backend_failure_falls_back_to_mock(settings):
    request = httpx.Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")
    generator, completions = generator_with(settings, error=openai.APIConnectionError(request=request))

    result = await generator.generate_with_fallback(REQUEST)

    assert result.source == "mock"
    assert result.roadmap == mock_skill_roadmap(REQUEST.title)
    assert len(result.roadmap.skill_nodes) == 8
    assert len(completions.calls) == 1
    assert metrics.get_snapshot()["counters"]["roadmap.fallback"] == 1


async def test_unexpected_exception_falls_back_to_mock(settings):
    generator, _ = generator_with(settings, error=RuntimeError("boom"))

    result = await generator.generate_with_fallback(REQUEST)

    assert result.source == "mock"


@pytest.mark.parametrize("response", [
    SimpleNamespace(choices=[]),
    SimpleNamespace(choices=None),
    SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))]),
    SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="   "))]),
])
async def test_malformed_envelope(settings, response):
    generator, _ = generator_with(settings, response=response)

    with pytest.raises(GenerationError):
        await generator.generate_skill_roadmap(REQUEST)

    result = await generator.generate_with_fallback(REQUEST)
    assert result.source == "mock"


async def test_unparsable_answer_falls_back(settings):
    generator, _ = generator_with(settings, content="Here is a roadmap: step one, learn stuff.")

    with pytest.raises(GenerationError, match="Failed to extract valid JSON"):
        await generator.generate_skill_roadmap(REQUEST)

    result = await generator.generate_with_fallback(REQUEST)
    assert result.source == "mock"
    assert result.roadmap.career_title == "Software Developers"


def test_mock_roadmap_shape():
    roadmap = mock_skill_roadmap("Nurse")

    assert roadmap.career_title == "Nurse"
    assert [n.id for n in roadmap.skill_nodes] == [f"skill-{i}" for i in range(1, 9)]
    difficulties = [n.difficulty for n in roadmap.skill_nodes]
    assert difficulties == ["Beginner"] * 3 + ["Intermediate"] * 3 + ["Advanced"] * 2


async def test_generate_route_serves_mock_without_key(client):
    response = await client.post("/api/roadmaps/generate", json={"title": "Registered Nurses", "code": "29-1141.00"})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "mock"
    assert body["roadmap"]["careerTitle"] == "Registered Nurses"
    assert len(body["roadmap"]["skillNodes"]) == 8


async def test_generate_route_requires_title(client):
    response = await client.post("/api/roadmaps/generate", json={"description": "no title"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: title"}
