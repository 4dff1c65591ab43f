"""
Career catalog routes

Browse/search failures propagate as {"error": ...} with the upstream status so
the client can show an error state and offer a retry. The assessment endpoints
are the exception: they fall back to static profiler data.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from careerquest.dependencies import get_catalog_client
from careerquest.errors import UpstreamError
from careerquest.schemas.catalog import (
    CareerFullReport,
    CareerPage,
    IndustryList,
    InterestAnswers,
    InterestProfilerQuestions,
    InterestResults,
    JobZoneList,
)
from careerquest.services.interest_fallbacks import (
    FALLBACK_ANSWER_OPTIONS,
    FALLBACK_QUESTIONS,
    FALLBACK_RESULTS,
    sort_results,
)
from careerquest.services.onet_catalog import OnetCatalogClient
from careerquest.utils.logger import get_logger
from careerquest.utils.metrics import inc

router = APIRouter()
logger = get_logger("routes.catalog")


# ========== Interest Profiler ==========

@router.get("/interest-profiler/questions", response_model=InterestProfilerQuestions)
async def interest_profiler_questions(catalog: OnetCatalogClient = Depends(get_catalog_client)):
    try:
        questions = await catalog.fetch_interest_profiler_questions()
        if questions.questions:
            return questions
        logger.warning("O*NET returned no profiler questions, using fallback set")
    except UpstreamError as e:
        logger.error(f"Error fetching questions, using fallback set: {e.message}")

    inc("interest_profiler.fallback")
    return InterestProfilerQuestions(
        questions=FALLBACK_QUESTIONS,
        answer_options=FALLBACK_ANSWER_OPTIONS,
        fallback=True,
    )


@router.post("/interest-profiler/results", response_model=InterestResults)
async def interest_profiler_results(
    data: InterestAnswers,
    catalog: OnetCatalogClient = Depends(get_catalog_client),
):
    """Score the answers, highest interest area first"""
    try:
        results = await catalog.submit_interest_profiler_answers(data.answers)
        return InterestResults(results=sort_results(results))
    except UpstreamError as e:
        logger.error(f"Error submitting assessment, using fallback results: {e.message}")
        inc("interest_profiler.fallback")
        return InterestResults(results=sort_results(FALLBACK_RESULTS), fallback=True)


@router.get("/interest-profiler/careers", response_model=CareerPage)
async def matching_careers(
    area: str = Query(..., min_length=1),
    job_zone: Optional[int] = Query(None, ge=1, le=5),
    start: int = Query(1, ge=1),
    end: int = Query(20, ge=1),
    catalog: OnetCatalogClient = Depends(get_catalog_client),
):
    return await catalog.get_matching_careers(area, job_zone=job_zone, start=start, end=end)


@router.get("/job-zones", response_model=JobZoneList)
async def job_zones(catalog: OnetCatalogClient = Depends(get_catalog_client)):
    return await catalog.fetch_job_zones()


# ========== Browse & search ==========

@router.get("/careers", response_model=CareerPage)
async def all_careers(
    sort: str = "name",
    start: int = Query(1, ge=1),
    end: int = Query(20, ge=1),
    catalog: OnetCatalogClient = Depends(get_catalog_client),
):
    return await catalog.fetch_all_careers(sort=sort, start=start, end=end)


@router.get("/careers/{code}", response_model=CareerFullReport, response_model_exclude_none=True)
async def career_detail(code: str, catalog: OnetCatalogClient = Depends(get_catalog_client)):
    return await catalog.fetch_career_detail(code)


@router.get("/industries", response_model=IndustryList)
async def industries(catalog: OnetCatalogClient = Depends(get_catalog_client)):
    return await catalog.fetch_industries()


@router.get("/industries/{industry_code}/careers", response_model=CareerPage)
async def careers_by_industry(
    industry_code: str,
    category: str = "all",
    sort: str = "category",
    start: int = Query(1, ge=1),
    end: int = Query(20, ge=1),
    catalog: OnetCatalogClient = Depends(get_catalog_client),
):
    return await catalog.fetch_careers_by_industry(
        industry_code, category=category, sort=sort, start=start, end=end
    )


@router.get("/search", response_model=CareerPage)
async def search_careers(
    keyword: str = Query(..., min_length=1),
    start: int = Query(1, ge=1),
    end: int = Query(20, ge=1),
    catalog: OnetCatalogClient = Depends(get_catalog_client),
):
    return await catalog.search_careers_by_keyword(keyword, start=start, end=end)
