"""
Catalog records — Course, LearningPath, UserProgress, SkillAssessment

Plain immutable values. from_dict() decodes the camelCase wire shape used by
the remote API; to_dict() encodes back to it for serialization.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

LEVELS = ("Beginner", "Intermediate", "Advanced")


class MalformedPayload(ValueError):
    """A remote response body did not have the expected shape."""


def _require(data: Any, key: str, kind: type = str) -> Any:
    if not isinstance(data, dict):
        raise MalformedPayload(f"Expected an object, got {type(data).__name__}")
    if key not in data:
        raise MalformedPayload(f"Missing field: {key}")
    value = data[key]
    # bool is an int subclass; a progress of True is not a number
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise MalformedPayload(f"Field {key} must be {kind.__name__}")
    return value


def _string_list(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MalformedPayload(f"Field {key} must be a list of strings")
    return tuple(value)


def _records(data: Any, key: str, model) -> list:
    """Decode an optional list field of the response body; absent means empty."""
    if not isinstance(data, dict):
        raise MalformedPayload(f"Expected an object, got {type(data).__name__}")
    items = data.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedPayload(f"Field {key} must be a list")
    return [model.from_dict(item) for item in items]


@dataclass(frozen=True)
class Course:
    id: str
    title: str
    description: str = ""
    level: str = ""
    duration: str = ""
    authors: Tuple[str, ...] = ()
    skill_paths: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Course":
        return cls(
            id=_require(data, "id"),
            title=_require(data, "title"),
            description=data.get("description") or "",
            level=data.get("level") or "",
            duration=data.get("duration") or "",
            authors=_string_list(data, "authors"),
            skill_paths=_string_list(data, "skillPaths"),
            tags=_string_list(data, "tags"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "level": self.level,
            "duration": self.duration,
            "authors": list(self.authors),
            "skillPaths": list(self.skill_paths),
            "tags": list(self.tags),
        }

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title or description."""
        needle = query.lower()
        return needle in self.title.lower() or needle in self.description.lower()


@dataclass(frozen=True)
class LearningPath:
    id: str
    title: str
    description: str = ""
    courses: Tuple[Course, ...] = ()
    estimated_time: str = ""
    skill_level: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "LearningPath":
        return cls(
            id=_require(data, "id"),
            title=_require(data, "title"),
            description=data.get("description") or "",
            courses=tuple(_records(data, "courses", Course)),
            estimated_time=data.get("estimatedTime") or "",
            skill_level=data.get("skillLevel") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "courses": [c.to_dict() for c in self.courses],
            "estimatedTime": self.estimated_time,
            "skillLevel": self.skill_level,
        }


@dataclass(frozen=True)
class UserProgress:
    course_id: str
    progress: int
    time_spent: int = 0
    completed_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "UserProgress":
        time_spent = data.get("timeSpent", 0) if isinstance(data, dict) else 0
        if not isinstance(time_spent, int) or isinstance(time_spent, bool):
            raise MalformedPayload("Field timeSpent must be int")
        return cls(
            course_id=_require(data, "courseId"),
            progress=_require(data, "progress", int),
            time_spent=time_spent,
            completed_date=data.get("completedDate") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "courseId": self.course_id,
            "progress": self.progress,
        }
        if self.completed_date:
            out["completedDate"] = self.completed_date
        out["timeSpent"] = self.time_spent
        return out


@dataclass(frozen=True)
class SkillAssessment:
    skill_name: str
    current_level: str
    recommended_courses: Tuple[Course, ...] = field(default_factory=tuple)
    assessment_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skillName": self.skill_name,
            "currentLevel": self.current_level,
            "recommendedCourses": [c.to_dict() for c in self.recommended_courses],
            "assessmentUrl": self.assessment_url,
        }


def courses_from_body(body: Any) -> List[Course]:
    return _records(body, "courses", Course)


def learning_paths_from_body(body: Any) -> List[LearningPath]:
    return _records(body, "learningPaths", LearningPath)


def progress_from_body(body: Any) -> List[UserProgress]:
    return _records(body, "progress", UserProgress)
