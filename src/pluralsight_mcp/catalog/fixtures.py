"""
Fixture catalog — served whenever the remote API cannot answer.
"""

from typing import List, Optional

from pluralsight_mcp.catalog.models import (
    Course,
    LearningPath,
    SkillAssessment,
    UserProgress,
)

ASSESSMENT_URL_TEMPLATE = "https://app.pluralsight.com/skills/{skill_name}/assessment"
FALLBACK_ASSESSMENT_LEVEL = "Intermediate"

COURSES = (
    Course(
        id="react-fundamentals",
        title="React Fundamentals",
        description=(
            "Learn the basics of React development including components, "
            "props, and state management."
        ),
        level="Beginner",
        duration="4h 30m",
        authors=("John Doe",),
        skill_paths=("React", "Frontend Development"),
        tags=("react", "javascript", "frontend"),
    ),
    Course(
        id="advanced-typescript",
        title="Advanced TypeScript",
        description=(
            "Master advanced TypeScript concepts including generics, "
            "decorators, and advanced types."
        ),
        level="Advanced",
        duration="6h 15m",
        authors=("Jane Smith",),
        skill_paths=("TypeScript", "JavaScript"),
        tags=("typescript", "javascript", "types"),
    ),
    Course(
        id="docker-containerization",
        title="Docker Containerization",
        description=(
            "Learn how to containerize applications using Docker and manage "
            "container orchestration."
        ),
        level="Intermediate",
        duration="5h 20m",
        authors=("Mike Johnson",),
        skill_paths=("DevOps", "Cloud Computing"),
        tags=("docker", "containers", "devops"),
    ),
)

LEARNING_PATHS = (
    LearningPath(
        id="frontend-developer",
        title="Frontend Developer Path",
        description="Complete path to become a professional frontend developer",
        courses=COURSES[:2],
        estimated_time="40 hours",
        skill_level="Beginner to Advanced",
    ),
)

USER_PROGRESS = (
    UserProgress(course_id="react-fundamentals", progress=75, time_spent=180),
    UserProgress(
        course_id="advanced-typescript",
        progress=100,
        completed_date="2024-01-15",
        time_spent=375,
    ),
)


def search_courses(query: str) -> List[Course]:
    return [c for c in COURSES if c.matches(query)]


def find_course(course_id: str) -> Optional[Course]:
    for course in COURSES:
        if course.id == course_id:
            return course
    return None


def learning_paths() -> List[LearningPath]:
    return list(LEARNING_PATHS)


def user_progress() -> List[UserProgress]:
    # Same two entries for every user
    return list(USER_PROGRESS)


def skill_assessment(skill_name: str) -> SkillAssessment:
    return SkillAssessment(
        skill_name=skill_name,
        current_level=FALLBACK_ASSESSMENT_LEVEL,
        recommended_courses=COURSES[:3],
        assessment_url=ASSESSMENT_URL_TEMPLATE.format(skill_name=skill_name),
    )
