# Database models package
from careerquest.models.saved_career import SavedCareer
from careerquest.models.saved_roadmap import SavedRoadmap

__all__ = [
    "SavedCareer",
    "SavedRoadmap",
]
