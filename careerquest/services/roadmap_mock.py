"""Deterministic roadmap used whenever AI generation is unavailable or fails"""
from careerquest.schemas.roadmap import SkillRoadmap


_MOCK_NODES = [
    {
        "id": "skill-1",
        "title": "Learn Basic Programming Concepts",
        "description": "Master fundamental programming concepts including variables, data types, control structures, and functions.",
        "timeframe": "0-3 months",
        "resources": [
            {"name": "Codecademy - Learn Programming", "url": "https://www.codecademy.com/"},
            {"name": "CS50: Introduction to Computer Science", "url": "https://cs50.harvard.edu/college/2023/fall/"},
        ],
        "difficulty": "Beginner",
    },
    {
        "id": "skill-2",
        "title": "Object-Oriented Programming",
        "description": "Understand OOP principles including classes, objects, inheritance, polymorphism, and encapsulation.",
        "timeframe": "0-3 months",
        "resources": [
            {"name": "Object-Oriented Programming in Java", "url": "https://www.coursera.org/learn/object-oriented-java"},
        ],
        "difficulty": "Beginner",
    },
    {
        "id": "skill-3",
        "title": "Version Control with Git",
        "description": "Learn to manage code repositories, track changes, and collaborate using Git and GitHub.",
        "timeframe": "0-3 months",
        "resources": [
            {"name": "Git - The Simple Guide", "url": "https://rogerdudler.github.io/git-guide/"},
            {"name": "GitHub Skills", "url": "https://skills.github.com/"},
        ],
        "difficulty": "Beginner",
    },
    {
        "id": "skill-4",
        "title": "Frontend Development",
        "description": "Master HTML, CSS, and JavaScript to build interactive user interfaces.",
        "timeframe": "3-6 months",
        "resources": [
            {"name": "MDN Web Docs", "url": "https://developer.mozilla.org/"},
            {"name": "Frontend Masters", "url": "https://frontendmasters.com/"},
        ],
        "difficulty": "Intermediate",
    },
    {
        "id": "skill-5",
        "title": "Backend Development",
        "description": "Learn server-side programming, API design, and database management.",
        "timeframe": "3-6 months",
        "resources": [
            {"name": "FastAPI Documentation", "url": "https://fastapi.tiangolo.com/"},
            {"name": "PostgreSQL Tutorial", "url": "https://www.postgresql.org/docs/current/tutorial.html"},
        ],
        "difficulty": "Intermediate",
    },
    {
        "id": "skill-6",
        "title": "Software Testing",
        "description": "Understand different testing methodologies and tools to ensure code quality.",
        "timeframe": "6-12 months",
        "resources": [
            {"name": "Test Automation University", "url": "https://testautomationu.applitools.com/"},
        ],
        "difficulty": "Intermediate",
    },
    {
        "id": "skill-7",
        "title": "System Design",
        "description": "Learn to design scalable, resilient software systems and architectures.",
        "timeframe": "1-2 years",
        "resources": [
            {"name": "System Design Primer", "url": "https://github.com/donnemartin/system-design-primer"},
        ],
        "difficulty": "Advanced",
    },
    {
        "id": "skill-8",
        "title": "DevOps and Deployment",
        "description": "Master CI/CD pipelines, containerization, and cloud deployment.",
        "timeframe": "1-2 years",
        "resources": [
            {"name": "Docker Documentation", "url": "https://docs.docker.com/"},
            {"name": "AWS Training and Certification", "url": "https://aws.amazon.com/training/"},
        ],
        "difficulty": "Advanced",
    },
]


def mock_skill_roadmap(career_title: str) -> SkillRoadmap:
    """Fixed 8-node roadmap; only the title changes with the request"""
    return SkillRoadmap.model_validate({"careerTitle": career_title, "skillNodes": _MOCK_NODES})
