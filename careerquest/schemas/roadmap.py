"""
Pydantic schemas for skill roadmaps

Wire names are camelCase (careerTitle, skillNodes) to match what the
generative backend is asked to produce and what the UI stores.
"""
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator


Difficulty = Literal["Beginner", "Intermediate", "Advanced"]


class Resource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    url: str


class SkillNode(BaseModel):
    """One milestone of a roadmap"""
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: str
    timeframe: str = Field(..., description="0-3 months / 3-6 months / 6-12 months / 1-2 years")
    difficulty: Difficulty
    resources: Optional[List[Resource]] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, value):
        # Models sometimes number the nodes instead of using "skill-N"
        return str(value) if isinstance(value, int) else value


class SkillRoadmap(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    career_title: str = Field(..., alias="careerTitle")
    skill_nodes: List[SkillNode] = Field(..., alias="skillNodes", min_length=1)


class RoadmapRequest(BaseModel):
    """Career details the roadmap is generated for"""
    code: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    interests: List[str] = Field(default_factory=list)


class RoadmapResponse(BaseModel):
    roadmap: SkillRoadmap
    source: Literal["ai", "mock"]
