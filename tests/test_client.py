"""Tests for CatalogClient — remote calls and fixture fallback."""

import httpx
import pytest

from pluralsight_mcp.catalog.client import FIXTURE, REMOTE
from pluralsight_mcp.catalog.models import Course, SkillAssessment

COURSE_WIRE = {
    "id": "go-basics",
    "title": "Go Basics",
    "description": "Goroutines and channels.",
    "level": "Beginner",
    "duration": "3h",
    "authors": ["Rob"],
    "skillPaths": ["Go"],
    "tags": ["go"],
}


class TestRemote:
    async def test_search_sends_query_and_filters(self, make_client):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"courses": [COURSE_WIRE]})

        client = make_client(handler)
        fetched = await client.search_courses("go", level="Beginner", tag="go")

        assert fetched.source == REMOTE
        assert not fetched.degraded
        assert fetched.value == [Course.from_dict(COURSE_WIRE)]

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/courses/search"
        assert dict(request.url.params) == {"q": "go", "level": "Beginner", "tag": "go"}

    async def test_headers(self, make_client):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"learningPaths": []})

        await make_client(handler).get_learning_paths()
        assert seen[0].headers["Authorization"] == "Bearer test-key"
        assert seen[0].headers["Content-Type"] == "application/json"

    async def test_missing_list_field_is_empty(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={}))
        fetched = await client.search_courses("anything")
        assert fetched.source == REMOTE
        assert fetched.value == []

    async def test_get_course_path_is_encoded(self, make_client):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=COURSE_WIRE)

        fetched = await make_client(handler).get_course("a/b")
        assert fetched.value.title == "Go Basics"
        assert seen[0].url.raw_path == b"/api/courses/a%2Fb"

    async def test_user_progress(self, make_client):
        body = {"progress": [{"courseId": "go-basics", "progress": 40, "timeSpent": 12}]}
        client = make_client(lambda request: httpx.Response(200, json=body))
        fetched = await client.get_user_progress("u1")
        assert fetched.value[0].progress == 40
        assert fetched.value[0].completed_date is None

    async def test_skill_assessment_is_verbatim(self, make_client):
        body = {"skillName": "Go", "score": 212, "extra": [1, 2]}
        client = make_client(lambda request: httpx.Response(200, json=body))
        fetched = await client.get_skill_assessment("Go")
        assert fetched.value == body


class TestFallback:
    async def test_search_unreachable(self, offline_client):
        fetched = await offline_client.search_courses("react")
        assert fetched.degraded
        assert fetched.source == FIXTURE
        assert fetched.error
        assert [c.id for c in fetched.value] == ["react-fundamentals"]

    async def test_search_ignores_filters_on_fallback(self, offline_client):
        fetched = await offline_client.search_courses("docker", level="Beginner")
        assert [c.id for c in fetched.value] == ["docker-containerization"]

    @pytest.mark.parametrize("status", [401, 404, 500])
    async def test_error_status(self, make_client, status):
        client = make_client(lambda request: httpx.Response(status, json={"error": "no"}))
        fetched = await client.get_course("react-fundamentals")
        assert fetched.degraded
        assert fetched.value.title == "React Fundamentals"

    async def test_unknown_course_is_none(self, offline_client):
        fetched = await offline_client.get_course("does-not-exist")
        assert fetched.degraded
        assert fetched.value is None

    async def test_invalid_json(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        fetched = await client.get_learning_paths()
        assert fetched.degraded
        assert fetched.value[0].id == "frontend-developer"

    async def test_malformed_body(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"progress": [{"courseId": 1}]}))
        fetched = await client.get_user_progress("u1")
        assert fetched.degraded
        assert len(fetched.value) == 2

    async def test_timeout(self, make_client):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        fetched = await make_client(handler).get_skill_assessment("Python")
        assert fetched.degraded
        assert isinstance(fetched.value, SkillAssessment)
        assert fetched.value.skill_name == "Python"
