"""
Saved careers and saved roadmaps

Every query is scoped to the requesting user. Saving is create-or-update on
(user_id, career_code); the unique constraint only fires when two first-time
saves race, and the loser gets a ConflictError (a retry takes the update path).
"""
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from careerquest.errors import ConflictError, NotFoundError, ValidationError
from careerquest.models.saved_career import SavedCareer
from careerquest.models.saved_roadmap import SavedRoadmap
from careerquest.schemas.roadmap import SkillRoadmap
from careerquest.utils.logger import get_logger

logger = get_logger("services.saves")

SAVE_KINDS = {"career": SavedCareer, "roadmap": SavedRoadmap}


async def _find_by_code(db: AsyncSession, model, user_id: str, career_code: str):
    result = await db.execute(
        select(model).where(model.user_id == user_id, model.career_code == career_code)
    )
    return result.scalar_one_or_none()


async def _find_owned(db: AsyncSession, model, user_id: str, record_id: int):
    result = await db.execute(
        select(model).where(model.id == record_id, model.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def _insert(db: AsyncSession, record, conflict_message: str):
    db.add(record)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Concurrent first save lost the race: {conflict_message}")
        raise ConflictError(conflict_message) from e
    await db.refresh(record)
    return record


# ========== Saved careers ==========

async def save_career(
    db: AsyncSession,
    user_id: str,
    career_code: str,
    career_title: str,
    notes: Optional[str] = None,
) -> Tuple[bool, SavedCareer]:
    """Returns (created, record). An existing save only gets its notes replaced."""
    existing = await _find_by_code(db, SavedCareer, user_id, career_code)
    if existing:
        existing.notes = notes
        existing.updated_at = datetime.utcnow()
        await db.commit()
        await db.refresh(existing)
        return False, existing

    record = SavedCareer(
        user_id=user_id,
        career_code=career_code,
        career_title=career_title,
        notes=notes,
        saved_at=datetime.utcnow(),
    )
    await _insert(db, record, "You have already saved this career")
    logger.info(f"Saved career {career_code}", extra={"career_code": career_code, "saved_id": record.id})
    return True, record


async def list_saved_careers(db: AsyncSession, user_id: str) -> List[SavedCareer]:
    result = await db.execute(
        select(SavedCareer)
        .where(SavedCareer.user_id == user_id)
        .order_by(SavedCareer.saved_at.desc(), SavedCareer.id.desc())
    )
    return list(result.scalars().all())


async def delete_saved_career(db: AsyncSession, user_id: str, record_id: int) -> None:
    record = await _find_owned(db, SavedCareer, user_id, record_id)
    if not record:
        raise NotFoundError("Saved career not found")
    await db.delete(record)
    await db.commit()


# ========== Saved roadmaps ==========

async def save_roadmap(
    db: AsyncSession,
    user_id: str,
    career_code: str,
    career_title: str,
    roadmap: SkillRoadmap,
    notes: Optional[str] = None,
    career_description: Optional[str] = None,
    interests: Optional[List[str]] = None,
) -> Tuple[bool, SavedRoadmap]:
    """Returns (created, record). Re-saving replaces the roadmap but keeps progress."""
    roadmap_data = roadmap.model_dump(by_alias=True, exclude_none=True)

    existing = await _find_by_code(db, SavedRoadmap, user_id, career_code)
    if existing:
        existing.roadmap_data = roadmap_data
        existing.notes = notes
        existing.career_description = career_description
        existing.interests = interests
        existing.updated_at = datetime.utcnow()
        await db.commit()
        await db.refresh(existing)
        return False, existing

    record = SavedRoadmap(
        user_id=user_id,
        career_code=career_code,
        career_title=career_title,
        career_description=career_description,
        interests=interests,
        roadmap_data=roadmap_data,
        completed_skills={},
        notes=notes,
        saved_at=datetime.utcnow(),
    )
    await _insert(db, record, "You have already saved a roadmap for this career")
    logger.info(f"Saved roadmap for {career_code}", extra={"career_code": career_code, "saved_id": record.id})
    return True, record


async def list_saved_roadmaps(db: AsyncSession, user_id: str) -> List[SavedRoadmap]:
    result = await db.execute(
        select(SavedRoadmap)
        .where(SavedRoadmap.user_id == user_id)
        .order_by(SavedRoadmap.saved_at.desc(), SavedRoadmap.id.desc())
    )
    return list(result.scalars().all())


async def get_saved_roadmap(db: AsyncSession, user_id: str, record_id: int) -> SavedRoadmap:
    record = await _find_owned(db, SavedRoadmap, user_id, record_id)
    if not record:
        raise NotFoundError("Saved roadmap not found")
    return record


async def delete_saved_roadmap(db: AsyncSession, user_id: str, record_id: int) -> None:
    record = await _find_owned(db, SavedRoadmap, user_id, record_id)
    if not record:
        raise NotFoundError("Saved roadmap not found")
    await db.delete(record)
    await db.commit()


async def update_completed_skills(
    db: AsyncSession,
    user_id: str,
    record_id: int,
    completed_skills: Dict[str, bool],
) -> SavedRoadmap:
    """Replace the progress map only; last write wins"""
    record = await _find_owned(db, SavedRoadmap, user_id, record_id)
    if not record:
        raise NotFoundError("Saved roadmap not found")
    record.completed_skills = dict(completed_skills)
    record.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(record)
    return record


# ========== Lookup ==========

async def check_saved(
    db: AsyncSession,
    user_id: str,
    career_code: str,
    kind: str = "career",
) -> Tuple[bool, Optional[int]]:
    model = SAVE_KINDS.get(kind)
    if model is None:
        raise ValidationError(f"Invalid type: {kind}. Expected 'career' or 'roadmap'")
    record = await _find_by_code(db, model, user_id, career_code)
    return (record is not None, record.id if record else None)
