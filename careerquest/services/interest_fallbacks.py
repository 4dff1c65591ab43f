"""
Static Interest Profiler data served when O*NET is unreachable

The assessment still works offline from the catalog: a short question set,
the standard five answer labels and a fixed result profile.
"""
from typing import List

from careerquest.schemas.catalog import AnswerOption, InterestQuestion, InterestResult


FALLBACK_QUESTIONS: List[InterestQuestion] = [
    InterestQuestion(index=i, area=area, text=text)
    for i, (area, text) in enumerate([
        ("Realistic", "Build kitchen cabinets"),
        ("Realistic", "Lay brick or tile"),
        ("Investigative", "Study animal behavior"),
        ("Investigative", "Develop a new medicine"),
        ("Artistic", "Write books or plays"),
        ("Artistic", "Play a musical instrument"),
        ("Social", "Teach children how to read"),
        ("Social", "Help people with personal problems"),
        ("Enterprising", "Sell merchandise at a department store"),
        ("Enterprising", "Manage a retail store"),
        ("Conventional", "Organize and file records"),
        ("Conventional", "Keep track of inventory"),
        ("Realistic", "Repair household appliances"),
        ("Investigative", "Study ways to reduce water pollution"),
        ("Artistic", "Design artwork for magazines"),
        ("Social", "Help conduct a group therapy session"),
        ("Enterprising", "Buy and sell stocks and bonds"),
        ("Conventional", "Develop a spreadsheet using computer software"),
        ("Realistic", "Assemble electronic parts"),
        ("Investigative", "Conduct chemical experiments"),
    ], start=1)
]

FALLBACK_ANSWER_OPTIONS: List[AnswerOption] = [
    AnswerOption(value=1, name="STRONGLY DISLIKE"),
    AnswerOption(value=2, name="DISLIKE"),
    AnswerOption(value=3, name="UNSURE"),
    AnswerOption(value=4, name="LIKE"),
    AnswerOption(value=5, name="STRONGLY LIKE"),
]

FALLBACK_RESULTS: List[InterestResult] = [
    InterestResult(
        area="Realistic",
        score=15,
        description="People with Realistic interests like work that includes practical, hands-on problems and answers. They like working with plants, animals, and materials like wood, tools, and machinery. They often enjoy working outdoors.",
    ),
    InterestResult(
        area="Investigative",
        score=20,
        description="People with Investigative interests like work that has to do with ideas and thinking rather than physical activity. They like searching for facts and figuring out problems.",
    ),
    InterestResult(
        area="Artistic",
        score=18,
        description="People with Artistic interests like work that deals with the artistic side of things, such as acting, music, art, and design. They like creativity in their work and work that can be done without following a clear set of rules.",
    ),
    InterestResult(
        area="Social",
        score=25,
        description="People with Social interests like working with others to help them learn and grow. They like working with people more than working with objects, machines, or information.",
    ),
    InterestResult(
        area="Enterprising",
        score=22,
        description="People with Enterprising interests like work that has to do with starting up and carrying out business projects. They like taking action rather than thinking about things.",
    ),
    InterestResult(
        area="Conventional",
        score=12,
        description="People with Conventional interests like work that follows set procedures and routines. They prefer working with information and paying attention to details rather than working with ideas.",
    ),
]


def sort_results(results: List[InterestResult]) -> List[InterestResult]:
    """Highest score first; ties keep upstream order"""
    return sorted(results, key=lambda r: r.score, reverse=True)
