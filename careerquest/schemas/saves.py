"""Request bodies for saved careers and saved roadmaps"""
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from careerquest.schemas.roadmap import SkillRoadmap


class SaveCareerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    career_code: str = Field(..., alias="careerCode", min_length=1, max_length=32)
    career_title: str = Field(..., alias="careerTitle", min_length=1, max_length=500)
    notes: Optional[str] = None


class SaveRoadmapRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    career_code: str = Field(..., alias="careerCode", min_length=1, max_length=32)
    career_title: str = Field(..., alias="careerTitle", min_length=1, max_length=500)
    roadmap_data: SkillRoadmap = Field(..., alias="roadmapData")
    notes: Optional[str] = None
    career_description: Optional[str] = Field(None, alias="careerDescription")
    interests: Optional[List[str]] = None


class DeleteSaveRequest(BaseModel):
    id: int


class CompletedSkillsUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    completed_skills: Dict[str, bool] = Field(..., alias="completedSkills")
