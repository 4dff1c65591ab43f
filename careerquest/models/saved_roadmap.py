from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, UniqueConstraint
from datetime import datetime
from careerquest.database import Base


class SavedRoadmap(Base):
    """
    A generated skill roadmap kept by a user, with per-skill progress.

    roadmap_data holds the SkillRoadmap JSON ({careerTitle, skillNodes}).
    completed_skills maps skill node id -> bool and is updated on its own
    (PATCH) without touching the rest of the row.
    """
    __tablename__ = "saved_roadmaps"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)

    career_code = Column(String(32), nullable=False)
    career_title = Column(String(500), nullable=False)
    career_description = Column(Text, nullable=True)
    interests = Column(JSON, nullable=True)  # list of interest area names

    roadmap_data = Column(JSON, nullable=False)
    completed_skills = Column(JSON, nullable=False, default=dict)
    notes = Column(Text, nullable=True)

    saved_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "career_code", name="uq_saved_roadmaps_user_career"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "careerCode": self.career_code,
            "careerTitle": self.career_title,
            "careerDescription": self.career_description,
            "interests": self.interests or [],
            "roadmapData": self.roadmap_data,
            "completedSkills": self.completed_skills or {},
            "notes": self.notes,
            "savedAt": self.saved_at.isoformat() if self.saved_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
