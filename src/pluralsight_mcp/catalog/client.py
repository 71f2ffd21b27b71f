"""
Catalog Client — Remote content API with fixture fallback

Every lookup tries the remote API first. Any call failure (network error,
timeout, non-2xx status, unparseable or malformed body) is absorbed here and
answered from the fixture catalog instead, so callers always get a value.
The returned Fetched records which of the two answered.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

import httpx

from pluralsight_mcp.catalog import fixtures
from pluralsight_mcp.catalog.models import (
    Course,
    courses_from_body,
    learning_paths_from_body,
    progress_from_body,
)
from pluralsight_mcp.config import ClientConfig
from pluralsight_mcp.server.logger import get_logger

log = get_logger("catalog")

REMOTE = "remote"
FIXTURE = "fixture"

# MalformedPayload and JSON decode errors are both ValueError
_CALL_FAILURES = (httpx.HTTPError, httpx.InvalidURL, ValueError)


@dataclass(frozen=True)
class Fetched:
    """Outcome of one lookup: the value plus where it came from."""

    value: Any
    source: str = REMOTE
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.source == FIXTURE


def _segment(value: str) -> str:
    return quote(value, safe="")


class CatalogClient:
    """
    Async client for the learning-content catalog.

    Usage:
        async with CatalogClient(ClientConfig.from_env()) as client:
            fetched = await client.search_courses("react", level="Beginner")
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers=config.headers,
            transport=transport,
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        response = await self._http.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def _fetch(
        self,
        operation: str,
        path: str,
        decode: Callable[[Any], Any],
        fallback: Callable[[], Any],
        params: Optional[Dict[str, str]] = None,
    ) -> Fetched:
        try:
            body = await self._get(path, params=params)
            value = decode(body)
        except _CALL_FAILURES as exc:
            log.warning(f"{operation} failed, serving fixture data: {exc!r}")
            return Fetched(fallback(), source=FIXTURE, error=str(exc))

        log.debug(f"{operation} answered by remote API")
        return Fetched(value, source=REMOTE)

    async def search_courses(
        self,
        query: str,
        level: Optional[str] = None,
        skill_path: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Fetched:
        params = {"q": query}
        if level:
            params["level"] = level
        if skill_path:
            params["skillPath"] = skill_path
        if tag:
            params["tag"] = tag

        # The fixture search ignores filters, matching on the query only
        return await self._fetch(
            "search_courses",
            "/courses/search",
            courses_from_body,
            lambda: fixtures.search_courses(query),
            params=params,
        )

    async def get_course(self, course_id: str) -> Fetched:
        """Fetched.value is None when neither source knows the course."""
        return await self._fetch(
            "get_course",
            f"/courses/{_segment(course_id)}",
            Course.from_dict,
            lambda: fixtures.find_course(course_id),
        )

    async def get_learning_paths(self) -> Fetched:
        return await self._fetch(
            "get_learning_paths",
            "/learning-paths",
            learning_paths_from_body,
            fixtures.learning_paths,
        )

    async def get_user_progress(self, user_id: str) -> Fetched:
        return await self._fetch(
            "get_user_progress",
            f"/users/{_segment(user_id)}/progress",
            progress_from_body,
            fixtures.user_progress,
        )

    async def get_skill_assessment(self, skill_name: str) -> Fetched:
        # The remote assessment body is passed through untouched
        return await self._fetch(
            "get_skill_assessment",
            f"/skills/{_segment(skill_name)}/assessment",
            lambda body: body,
            lambda: fixtures.skill_assessment(skill_name),
        )
