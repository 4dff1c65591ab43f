"""
Pydantic schemas for O*NET catalog data

List endpoints return slightly different career shapes depending on where they
come from; CareerSummary is the single normalized record for all of them:

- interest profiler matches (mnm/interestprofiler/careers): ``fit``
- industry browsing (mnm/browse/{code}): ``category``, ``percent_employed``
- keyword search (mnm/search) and the full list (mnm/careers): neither
"""
from typing import List, Optional, Dict, Any, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


INTEREST_AREAS = (
    "Realistic",
    "Investigative",
    "Artistic",
    "Social",
    "Enterprising",
    "Conventional",
)


def _none_to_list(value):
    return [] if value is None else value


class CareerTags(BaseModel):
    bright_outlook: bool = False
    green: bool = False
    apprenticeship: bool = False

    @field_validator("bright_outlook", "green", "apprenticeship", mode="before")
    @classmethod
    def null_flag_is_false(cls, value):
        return False if value is None else value


class CareerSummary(BaseModel):
    """A career as it appears in any list endpoint"""
    model_config = ConfigDict(extra="ignore")

    code: str
    title: str
    href: Optional[str] = None
    tags: CareerTags = Field(default_factory=CareerTags)
    fit: Optional[str] = Field(None, description="Best/Great/Good (interest matches only)")
    category: Optional[str] = Field(None, description="Most/Some (industry browsing only)")
    percent_employed: Optional[Union[int, float]] = Field(None, description="Industry browsing only")

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, value):
        return {} if value is None else value


class CareerPage(BaseModel):
    """One page of a career list; ``career`` is never null"""
    start: int = 1
    end: int = 0
    total: int = 0
    sort: Optional[str] = None
    keyword: Optional[str] = None
    career: List[CareerSummary] = Field(default_factory=list)
    has_next: bool = False

    @field_validator("career", mode="before")
    @classmethod
    def normalize_career(cls, value):
        return _none_to_list(value)


class IndustryItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: Union[int, str]
    title: str
    href: Optional[str] = None


class IndustryList(BaseModel):
    industry: List[IndustryItem] = Field(default_factory=list)

    @field_validator("industry", mode="before")
    @classmethod
    def normalize_industry(cls, value):
        return _none_to_list(value)


class JobZoneItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    value: Optional[int] = None
    title: Optional[str] = None


class JobZoneList(BaseModel):
    """Job zone reference data; other top-level fields pass through"""
    model_config = ConfigDict(extra="allow")

    job_zone: List[JobZoneItem] = Field(default_factory=list)

    @field_validator("job_zone", mode="before")
    @classmethod
    def normalize_job_zone(cls, value):
        return _none_to_list(value)


class CareerOverview(BaseModel):
    """The ``career`` section of mnm/careers/{code}/report"""
    model_config = ConfigDict(extra="allow")

    code: str
    title: str
    tags: CareerTags = Field(default_factory=CareerTags)
    also_called: Optional[Dict[str, Any]] = None
    what_they_do: Optional[str] = None
    on_the_job: Optional[Dict[str, Any]] = None
    career_video: Optional[bool] = None
    resources: Optional[Dict[str, Any]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, value):
        return {} if value is None else value


class CareerFullReport(BaseModel):
    """Aggregate report for one career; every section past ``career`` is optional"""
    model_config = ConfigDict(extra="allow")

    code: str
    career: CareerOverview
    knowledge: Optional[Dict[str, Any]] = None
    skills: Optional[Dict[str, Any]] = None
    abilities: Optional[Dict[str, Any]] = None
    personality: Optional[Dict[str, Any]] = None
    technology: Optional[Dict[str, Any]] = None
    education: Optional[Dict[str, Any]] = None
    job_outlook: Optional[Dict[str, Any]] = None
    check_out_my_state: Optional[Dict[str, Any]] = None
    explore_more: Optional[Dict[str, Any]] = None
    where_do_they_work: Optional[Dict[str, Any]] = None


# ========== Interest Profiler ==========
class InterestQuestion(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int
    area: str
    text: str


class AnswerOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: int
    name: str


class InterestProfilerQuestions(BaseModel):
    questions: List[InterestQuestion] = Field(default_factory=list)
    answer_options: List[AnswerOption] = Field(default_factory=list)
    fallback: bool = False


class InterestResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    area: str
    score: int
    description: str = ""


class InterestAnswers(BaseModel):
    """Sparse answers keyed by 1-based question index"""
    answers: Dict[int, int] = Field(default_factory=dict)


class InterestResults(BaseModel):
    results: List[InterestResult]
    fallback: bool = False
