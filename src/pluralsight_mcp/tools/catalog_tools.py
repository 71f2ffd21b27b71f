"""
Catalog Tools — Pluralsight catalog lookups exposed as MCP tools

Tools:
  search_courses        — Keyword search with optional level/skill path/tag filters
  get_course            — One course by id
  get_learning_paths    — All learning paths
  get_user_progress     — Per-course progress for a user
  get_skill_assessment  — Skill level and recommended courses
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pluralsight_mcp.catalog.client import CatalogClient
from pluralsight_mcp.catalog.models import LEVELS
from pluralsight_mcp.server.logger import get_logger
from pluralsight_mcp.server.protocol import error_result, text_result

log = get_logger("tools.catalog")

COURSE_NOT_FOUND = "Course not found"


TOOLS: List[Dict[str, Any]] = [
    {
        "name": "search_courses",
        "description": "Search for Pluralsight courses by query and optional filters",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query for courses",
                },
                "level": {
                    "type": "string",
                    "description": "Course difficulty level (Beginner, Intermediate, Advanced)",
                    "enum": list(LEVELS),
                },
                "skillPath": {
                    "type": "string",
                    "description": "Skill path to filter by",
                },
                "tag": {
                    "type": "string",
                    "description": "Tag to filter by",
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": "get_course",
        "description": "Get detailed information about a specific course",
        "inputSchema": {
            "type": "object",
            "properties": {
                "courseId": {
                    "type": "string",
                    "description": "The ID of the course to retrieve",
                },
            },
            "required": ["courseId"],
        },
    },
    {
        "name": "get_learning_paths",
        "description": "Get available learning paths",
        "inputSchema": {
            "type": "object",
            "properties": {},
        },
    },
    {
        "name": "get_user_progress",
        "description": "Get user progress for courses",
        "inputSchema": {
            "type": "object",
            "properties": {
                "userId": {
                    "type": "string",
                    "description": "The ID of the user",
                },
            },
            "required": ["userId"],
        },
    },
    {
        "name": "get_skill_assessment",
        "description": "Get skill assessment information and recommendations",
        "inputSchema": {
            "type": "object",
            "properties": {
                "skillName": {
                    "type": "string",
                    "description": "Name of the skill to assess",
                },
            },
            "required": ["skillName"],
        },
    },
]

TOOL_NAMES = frozenset(t["name"] for t in TOOLS)


# --- typed arguments, one record per tool ---

class InvalidArguments(ValueError):
    """Tool arguments are missing a required field or have the wrong type."""


def _required(args: Dict[str, Any], key: str) -> str:
    value = args.get(key)
    if value is None:
        raise InvalidArguments(f"Missing required argument: {key}")
    if not isinstance(value, str):
        raise InvalidArguments(f"Argument {key} must be a string")
    return value


def _optional(args: Dict[str, Any], key: str) -> Optional[str]:
    value = args.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidArguments(f"Argument {key} must be a string")
    return value


@dataclass(frozen=True)
class SearchCoursesArgs:
    query: str
    level: Optional[str] = None
    skill_path: Optional[str] = None
    tag: Optional[str] = None


@dataclass(frozen=True)
class GetCourseArgs:
    course_id: str


@dataclass(frozen=True)
class GetLearningPathsArgs:
    pass


@dataclass(frozen=True)
class GetUserProgressArgs:
    user_id: str


@dataclass(frozen=True)
class GetSkillAssessmentArgs:
    skill_name: str


DECODERS = {
    "search_courses": lambda args: SearchCoursesArgs(
        query=_required(args, "query"),
        level=_optional(args, "level"),
        skill_path=_optional(args, "skillPath"),
        tag=_optional(args, "tag"),
    ),
    "get_course": lambda args: GetCourseArgs(course_id=_required(args, "courseId")),
    "get_learning_paths": lambda args: GetLearningPathsArgs(),
    "get_user_progress": lambda args: GetUserProgressArgs(user_id=_required(args, "userId")),
    "get_skill_assessment": lambda args: GetSkillAssessmentArgs(
        skill_name=_required(args, "skillName"),
    ),
}


def decode_arguments(name: str, args: Optional[Dict[str, Any]]):
    """Decode the raw argument object of a tool into its typed record.

    The caller has already resolved name to one of TOOL_NAMES.
    """
    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise InvalidArguments("Tool arguments must be an object")
    return DECODERS[name](args)


# --- serialization ---

def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def render(value: Any) -> str:
    """Pretty-printed JSON text of a record, a list of records, or raw JSON."""
    return json.dumps(_plain(value), indent=2, ensure_ascii=False)


class CatalogTools:
    """Dispatches tools/call requests onto a CatalogClient."""

    def __init__(self, client: CatalogClient):
        self.client = client
        self._handlers = {
            "search_courses": self._search_courses,
            "get_course": self._get_course,
            "get_learning_paths": self._get_learning_paths,
            "get_user_progress": self._get_user_progress,
            "get_skill_assessment": self._get_skill_assessment,
        }

    async def handle_tool(self, name: str, args: Dict[str, Any]) -> Dict[str, Any]:
        handler = self._handlers.get(name)
        if not handler:
            return error_result(f"Unknown tool: {name}")

        try:
            return text_result(await handler(decode_arguments(name, args)))
        except Exception as exc:
            log.error(f"Tool {name} failed: {exc}", exc_info=True)
            return error_result(str(exc))

    def _note(self, name: str, fetched):
        if fetched.degraded:
            log.info(f"{name}: answered from fixture data")
        return fetched.value

    async def _search_courses(self, args: SearchCoursesArgs) -> str:
        fetched = await self.client.search_courses(
            args.query, level=args.level, skill_path=args.skill_path, tag=args.tag,
        )
        return render(self._note("search_courses", fetched))

    async def _get_course(self, args: GetCourseArgs) -> str:
        course = self._note("get_course", await self.client.get_course(args.course_id))
        if course is None:
            return COURSE_NOT_FOUND
        return render(course)

    async def _get_learning_paths(self, args: GetLearningPathsArgs) -> str:
        return render(self._note("get_learning_paths", await self.client.get_learning_paths()))

    async def _get_user_progress(self, args: GetUserProgressArgs) -> str:
        return render(self._note("get_user_progress", await self.client.get_user_progress(args.user_id)))

    async def _get_skill_assessment(self, args: GetSkillAssessmentArgs) -> str:
        fetched = await self.client.get_skill_assessment(args.skill_name)
        return render(self._note("get_skill_assessment", fetched))
