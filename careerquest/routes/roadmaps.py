"""Skill roadmap generation route"""

from fastapi import APIRouter, Depends

from careerquest.dependencies import get_roadmap_generator
from careerquest.schemas.roadmap import RoadmapRequest, RoadmapResponse
from careerquest.services.roadmap_generator import RoadmapGenerator

router = APIRouter()


@router.post("/generate", response_model=RoadmapResponse, response_model_exclude_none=True)
async def generate_roadmap(
    data: RoadmapRequest,
    generator: RoadmapGenerator = Depends(get_roadmap_generator),
):
    """
    Generate a skill roadmap for a career.

    Never fails because of the AI backend: ``source`` is "mock" when the
    deterministic roadmap was served instead.
    """
    return await generator.generate_with_fallback(data)
