"""Saved career and saved roadmap routes (all scoped to the requesting user)"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from careerquest.database import get_db
from careerquest.middleware.auth import get_user_id
from careerquest.schemas.saves import (
    CompletedSkillsUpdate,
    DeleteSaveRequest,
    SaveCareerRequest,
    SaveRoadmapRequest,
)
from careerquest.services import saves

router = APIRouter()


# ========== Saved careers ==========

@router.post("/career")
async def save_career(
    data: SaveCareerRequest,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    created, record = await saves.save_career(
        db, user_id, data.career_code, data.career_title, data.notes
    )
    return {
        "message": "Career saved" if created else "Career updated",
        "savedCareer": record.to_dict(),
    }


@router.get("/career")
async def list_saved_careers(
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    records = await saves.list_saved_careers(db, user_id)
    return {"savedCareers": [r.to_dict() for r in records]}


@router.delete("/career")
async def delete_saved_career(
    data: DeleteSaveRequest,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    await saves.delete_saved_career(db, user_id, data.id)
    return {"message": "Saved career deleted"}


@router.get("/check")
async def check_saved(
    career_code: str = Query(..., alias="careerCode", min_length=1),
    kind: str = Query("career", alias="type"),
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    is_saved, saved_id = await saves.check_saved(db, user_id, career_code, kind)
    return {"isSaved": is_saved, "savedId": saved_id}


# ========== Saved roadmaps ==========

@router.post("/roadmap")
async def save_roadmap(
    data: SaveRoadmapRequest,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    created, record = await saves.save_roadmap(
        db,
        user_id,
        data.career_code,
        data.career_title,
        data.roadmap_data,
        notes=data.notes,
        career_description=data.career_description,
        interests=data.interests,
    )
    return {
        "message": "Roadmap saved" if created else "Roadmap updated",
        "savedRoadmap": record.to_dict(),
    }


@router.get("/roadmap")
async def list_saved_roadmaps(
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    records = await saves.list_saved_roadmaps(db, user_id)
    return {"savedRoadmaps": [r.to_dict() for r in records]}


@router.delete("/roadmap")
async def delete_saved_roadmap(
    data: DeleteSaveRequest,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    await saves.delete_saved_roadmap(db, user_id, data.id)
    return {"message": "Saved roadmap deleted"}


@router.get("/roadmap/{roadmap_id}")
async def get_saved_roadmap(
    roadmap_id: int,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    record = await saves.get_saved_roadmap(db, user_id, roadmap_id)
    return {"savedRoadmap": record.to_dict()}


@router.patch("/roadmap/{roadmap_id}")
async def update_completed_skills(
    roadmap_id: int,
    data: CompletedSkillsUpdate,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Progress toggles; the client debounces these and the last write wins"""
    record = await saves.update_completed_skills(db, user_id, roadmap_id, data.completed_skills)
    return {"message": "Completed skills updated", "savedRoadmap": record.to_dict()}
