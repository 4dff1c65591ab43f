"""
Typed access to O*NET "My Next Move" data through the proxy

Every call re-fetches (no caching, no retry). Failures raise UpstreamError with
the proxy's status and message; an ``error`` field embedded in a 200 payload is
treated the same way. List fields that come back null are normalized to [].
"""
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import quote

import pydantic

from careerquest.errors import NetworkError, UpstreamError, ValidationError
from careerquest.schemas.catalog import (
    INTEREST_AREAS,
    AnswerOption,
    CareerFullReport,
    CareerPage,
    IndustryList,
    InterestProfilerQuestions,
    InterestQuestion,
    JobZoneList,
    InterestResult,
)
from careerquest.services.onet_proxy import OnetProxy
from careerquest.services.pagination import DEFAULT_PAGE_SIZE, validate_bounds
from careerquest.utils.logger import get_logger

logger = get_logger("services.onet_catalog")

QUESTION_PAGE_SIZE = 12
TOTAL_QUESTIONS = 60
UNSURE_ANSWER = 3
ANSWER_RANGE = range(1, 6)

ALL_CAREERS_SORTS = {"name", "bright_outlook", "apprenticeship"}
INDUSTRY_CATEGORIES = {"all", "Most", "Some"}
INDUSTRY_SORTS = {"category", "name", "bright_outlook", "apprenticeship", "percent_employed"}

M = TypeVar("M", bound=pydantic.BaseModel)


def _links(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    link = data.get("link")
    if isinstance(link, dict):
        return [link]
    return [item for item in (link or []) if isinstance(item, dict)]


def has_next_page(data: Dict[str, Any]) -> bool:
    return any(item.get("rel") == "next" for item in _links(data))


def build_answer_string(answers: Dict[int, int]) -> str:
    """
    60-digit answer string for the Interest Profiler.

    Position i (1-based) holds the answer to question i; unanswered questions
    count as "Unsure" (3).
    """
    for index, value in answers.items():
        if not 1 <= int(index) <= TOTAL_QUESTIONS:
            raise ValidationError(f"Question index {index} is outside 1-{TOTAL_QUESTIONS}")
        if int(value) not in ANSWER_RANGE:
            raise ValidationError(f"Answer {value} for question {index} is outside 1-5")

    normalized = {int(k): int(v) for k, v in answers.items()}
    return "".join(str(normalized.get(i, UNSURE_ANSWER)) for i in range(1, TOTAL_QUESTIONS + 1))


class OnetCatalogClient:
    """Career, industry and interest-profiler fetchers built on OnetProxy"""

    def __init__(self, proxy: OnetProxy):
        self.proxy = proxy

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _get(self, path: str, params: Optional[Dict[str, Any]], operation: str) -> Dict[str, Any]:
        response = await self.proxy.forward(path, params)

        if not response.ok:
            message = None
            if isinstance(response.body, dict):
                message = response.body.get("error")
            message = message or f"Failed to {operation}: {response.status_code}"
            logger.error(f"Error trying to {operation}: {message}", extra={"upstream_status": response.status_code})
            if response.transport_failed:
                raise NetworkError(message)
            raise UpstreamError(message, response.status_code)

        data = response.body
        if not isinstance(data, dict):
            raise UpstreamError(f"Invalid response structure from O*NET Web Services for {operation}")
        if data.get("error"):
            logger.error(f"O*NET API Error while trying to {operation}: {data['error']}")
            raise UpstreamError(f"O*NET API Error: {data['error']}")
        return data

    @staticmethod
    def _parse(model: Type[M], data: Any, operation: str) -> M:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            logger.error(f"Unexpected O*NET payload for {operation}: {e.error_count()} validation errors")
            raise UpstreamError(f"Invalid response structure from O*NET Web Services for {operation}") from e

    async def _career_page(self, path: str, params: Dict[str, Any], operation: str) -> CareerPage:
        data = await self._get(path, params, operation)
        page = dict(data)
        page["has_next"] = has_next_page(data)
        return self._parse(CareerPage, page, operation)

    # ------------------------------------------------------------------
    # Interest Profiler
    # ------------------------------------------------------------------

    async def fetch_interest_profiler_questions(self) -> InterestProfilerQuestions:
        """
        All profiler questions in order, plus the five shared answer options.

        Follows the "next" link 12 questions at a time. An empty batch also ends
        the loop, and the page count is capped, so an inconsistent link on the
        last page cannot keep it going.
        """
        questions: List[InterestQuestion] = []
        start = 1
        max_pages = TOTAL_QUESTIONS // QUESTION_PAGE_SIZE + 1

        for page in range(1, max_pages + 1):
            data = await self._get(
                "mnm/interestprofiler/questions",
                {"start": start, "end": start + QUESTION_PAGE_SIZE - 1},
                "fetch questions",
            )
            batch = data.get("question") or []
            if not isinstance(batch, list):
                raise UpstreamError("Invalid response structure from O*NET Web Services for questions")

            questions.extend(self._parse(InterestQuestion, q, "fetch questions") for q in batch)

            if not batch or not has_next_page(data):
                break
            if page == max_pages:
                logger.warning(f"Stopped following question pages after {max_pages} requests")
                break
            start += QUESTION_PAGE_SIZE

        # Answer options are the same for every question; read them from page one
        first = await self._get(
            "mnm/interestprofiler/questions",
            {"start": 1, "end": QUESTION_PAGE_SIZE},
            "fetch answer options",
        )
        options = (first.get("answer_options") or {}).get("answer_option") or []
        answer_options = [self._parse(AnswerOption, o, "fetch answer options") for o in options]

        logger.info(f"Fetched {len(questions)} profiler questions, {len(answer_options)} answer options")
        return InterestProfilerQuestions(questions=questions, answer_options=answer_options)

    async def submit_interest_profiler_answers(self, answers: Dict[int, int]) -> List[InterestResult]:
        """Score a (sparse) answer set. Results come back in upstream order, unsorted."""
        answer_string = build_answer_string(answers)
        data = await self._get(
            "mnm/interestprofiler/results",
            {"answers": answer_string},
            "submit answers",
        )
        results = data.get("result")
        if not isinstance(results, list):
            raise UpstreamError("Invalid response structure from O*NET Web Services for results")
        return [self._parse(InterestResult, r, "submit answers") for r in results]

    async def get_matching_careers(
        self,
        area: str,
        job_zone: Optional[int] = None,
        start: int = 1,
        end: int = DEFAULT_PAGE_SIZE,
    ) -> CareerPage:
        if area not in INTEREST_AREAS:
            raise ValidationError(f"Invalid interest area: {area}. Expected one of: {', '.join(INTEREST_AREAS)}")
        validate_bounds(start, end)
        params: Dict[str, Any] = {"area": area, "start": start, "end": end}
        if job_zone:
            if not 1 <= job_zone <= 5:
                raise ValidationError("job_zone must be between 1 and 5")
            params["job_zone"] = job_zone
        return await self._career_page("mnm/interestprofiler/careers", params, "fetch matching careers")

    async def fetch_job_zones(self) -> JobZoneList:
        data = await self._get("mnm/interestprofiler/job_zones", None, "fetch job zones")
        return self._parse(JobZoneList, data, "fetch job zones")

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    async def fetch_all_careers(self, sort: str = "name", start: int = 1, end: int = DEFAULT_PAGE_SIZE) -> CareerPage:
        if sort not in ALL_CAREERS_SORTS:
            raise ValidationError(f"Invalid sort: {sort}")
        validate_bounds(start, end)
        return await self._career_page(
            "mnm/careers", {"sort": sort, "start": start, "end": end}, "fetch all careers"
        )

    async def fetch_industries(self) -> IndustryList:
        data = await self._get("mnm/browse", None, "fetch industries")
        return self._parse(IndustryList, data, "fetch industries")

    async def fetch_careers_by_industry(
        self,
        industry_code,
        category: str = "all",
        sort: str = "category",
        start: int = 1,
        end: int = DEFAULT_PAGE_SIZE,
    ) -> CareerPage:
        if category not in INDUSTRY_CATEGORIES:
            raise ValidationError(f"Invalid category: {category}")
        if sort not in INDUSTRY_SORTS:
            raise ValidationError(f"Invalid sort: {sort}")
        validate_bounds(start, end)
        return await self._career_page(
            f"mnm/browse/{quote(str(industry_code), safe='')}",
            {"category": category, "sort": sort, "start": start, "end": end},
            "fetch careers by industry",
        )

    async def search_careers_by_keyword(self, keyword: str, start: int = 1, end: int = DEFAULT_PAGE_SIZE) -> CareerPage:
        if not keyword or not keyword.strip():
            raise ValidationError("keyword is required")
        validate_bounds(start, end)
        return await self._career_page(
            "mnm/search", {"keyword": keyword.strip(), "start": start, "end": end}, "search careers"
        )

    async def fetch_career_detail(self, code: str) -> CareerFullReport:
        if not code:
            raise ValidationError("Career code is required")
        data = await self._get(
            f"mnm/careers/{quote(code, safe='')}/report", None, "fetch career full report"
        )
        return self._parse(CareerFullReport, data, "fetch career full report")
