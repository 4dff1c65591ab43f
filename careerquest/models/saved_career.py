from sqlalchemy import Column, Integer, String, DateTime, Text, UniqueConstraint
from datetime import datetime
from careerquest.database import Base


class SavedCareer(Base):
    """
    A career bookmarked by a user.

    At most one row per (user_id, career_code); saving again updates notes in place.
    """
    __tablename__ = "saved_careers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)

    career_code = Column(String(32), nullable=False)  # O*NET-SOC code, e.g. 15-1252.00
    career_title = Column(String(500), nullable=False)
    notes = Column(Text, nullable=True)

    saved_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "career_code", name="uq_saved_careers_user_career"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "careerCode": self.career_code,
            "careerTitle": self.career_title,
            "notes": self.notes,
            "savedAt": self.saved_at.isoformat() if self.saved_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
