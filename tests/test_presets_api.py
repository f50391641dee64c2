"""Tests for presets API: listing, lookup, creation, copying."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from conftest import insert_presets, seconds_since_base
from typing_api.db.session import async_session_maker
from typing_api.models.audit_log import AuditLog
from typing_api.models.preset import TestPreset


async def _preset_count() -> int:
    async with async_session_maker() as session:
        return (await session.execute(select(func.count()).select_from(TestPreset))).scalar()


@pytest.mark.asyncio
async def test_list_presets_pages(client: AsyncClient):
    await insert_presets([30, 20, 10])
    resp = await client.get("/api/v1/test-presets?take=2&skip=0")
    assert resp.status_code == 200
    data = resp.json()
    assert data["count"] == 2
    assert [seconds_since_base(e["cursor"]) for e in data["edges"]] == [30, 20]
    assert data["page_info"]["has_more"] is True
    assert data["edges"][0]["node"]["type"] == "time"

    resp = await client.get("/api/v1/test-presets?take=2&skip=2")
    data = resp.json()
    assert [seconds_since_base(e["cursor"]) for e in data["edges"]] == [10]
    assert data["page_info"]["has_more"] is False


@pytest.mark.asyncio
async def test_list_presets_empty(client: AsyncClient):
    resp = await client.get("/api/v1/test-presets")
    assert resp.status_code == 200
    assert resp.json() == {
        "count": 0,
        "edges": [],
        "page_info": {"has_more": False, "start_cursor": None, "end_cursor": None},
    }


@pytest.mark.asyncio
async def test_list_presets_filters(client: AsyncClient):
    await insert_presets([30], type="WORDS", words=25, time=None, language="SPANISH")
    await insert_presets([20], punctuated=True)
    resp = await client.get("/api/v1/test-presets?type=words&language=spanish")
    edges = resp.json()["edges"]
    assert len(edges) == 1
    assert edges[0]["node"]["words"] == 25

    resp = await client.get("/api/v1/test-presets?punctuated=true")
    edges = resp.json()["edges"]
    assert [seconds_since_base(e["cursor"]) for e in edges] == [20]


@pytest.mark.asyncio
async def test_list_presets_rejects_oversized_take(client: AsyncClient):
    resp = await client.get("/api/v1/test-presets?take=100000")
    assert resp.status_code == 422
    resp = await client.get("/api/v1/test-presets?take=0")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_presets_after_cursor(client: AsyncClient):
    await insert_presets([30, 20, 10])
    first = (await client.get("/api/v1/test-presets?take=1")).json()
    end = first["page_info"]["end_cursor"]
    resp = await client.get("/api/v1/test-presets", params={"take": 5, "after": end})
    assert [seconds_since_base(e["cursor"]) for e in resp.json()["edges"]] == [20, 10]


@pytest.mark.asyncio
async def test_list_all_includes_owned(client: AsyncClient, test_user):
    user_id, _, _ = test_user
    await insert_presets([30])
    await insert_presets([20], user_id=user_id)
    resp = await client.get("/api/v1/test-presets/all")
    assert resp.status_code == 200
    assert len(resp.json()) == 2


@pytest.mark.asyncio
async def test_get_preset(client: AsyncClient):
    (preset_id,) = await insert_presets([30])
    resp = await client.get(f"/api/v1/test-presets/{preset_id}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["test_preset"]["id"] == preset_id
    assert data["errors"] == []


@pytest.mark.asyncio
async def test_get_preset_not_found(client: AsyncClient):
    resp = await client.get("/api/v1/test-presets/999")
    data = resp.json()
    assert data["test_preset"] is None
    assert data["errors"] == [
        {"field": "preset", "message": "Unable to find preset with the given id", "kind": "not_found"}
    ]


@pytest.mark.asyncio
async def test_preset_creator(client: AsyncClient, test_user):
    user_id, username, _ = test_user
    (owned_id,) = await insert_presets([30], user_id=user_id)
    (public_id,) = await insert_presets([20])

    resp = await client.get(f"/api/v1/test-presets/{owned_id}/creator")
    user = resp.json()["user"]
    assert user["username"] == username
    assert user["badge"] == "default"
    assert user["auth_provider"] == "default"

    resp = await client.get(f"/api/v1/test-presets/{public_id}/creator")
    data = resp.json()
    assert data["user"] is None
    assert data["errors"][0]["field"] == "user"
    assert data["errors"][0]["kind"] == "not_found"


@pytest.mark.asyncio
async def test_create_preset_requires_session(client: AsyncClient):
    resp = await client.post("/api/v1/test-presets", json={"type": "time", "time": 60})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_preset_rejects_bad_session(client: AsyncClient):
    resp = await client.post(
        "/api/v1/test-presets",
        json={"type": "time", "time": 60},
        headers={"Cookie": "session=not-a-jwt"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_public_preset(client: AsyncClient, auth_headers: dict):
    resp = await client.post(
        "/api/v1/test-presets",
        json={"type": "time", "time": 60, "language": "english", "punctuated": True},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    preset = resp.json()["test_preset"]
    assert preset["user_id"] is None
    assert preset["time"] == 60
    assert preset["creator_image"] == "https://i.imgur.com/xuIzYtW.png"

    listed = (await client.get("/api/v1/test-presets")).json()
    assert [e["node"]["id"] for e in listed["edges"]] == [preset["id"]]

    async with async_session_maker() as session:
        r = await session.execute(select(AuditLog).where(AuditLog.resource_id == str(preset["id"])))
        assert r.scalar_one().action == "create"


@pytest.mark.asyncio
async def test_create_preset_validation_error(client: AsyncClient, auth_headers: dict):
    resp = await client.post("/api/v1/test-presets", json={"type": "words"}, headers=auth_headers)
    data = resp.json()
    assert data["test_preset"] is None
    assert data["errors"] == [
        {"field": "words", "message": "Word presets require a word count", "kind": "validation"}
    ]
    assert await _preset_count() == 0


@pytest.mark.asyncio
async def test_copy_missing_preset(client: AsyncClient, auth_headers: dict):
    resp = await client.post("/api/v1/test-presets/424242/copy", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["errors"] == [
        {"field": "preset", "message": "Unable to find preset with the given id", "kind": "not_found"}
    ]
    assert await _preset_count() == 0


@pytest.mark.asyncio
async def test_copy_preset_to_user(client: AsyncClient, test_user, auth_headers: dict):
    user_id, username, _ = test_user
    (source_id,) = await insert_presets([30], type="WORDS", words=100, time=None, content="QUOTES")
    resp = await client.post(f"/api/v1/test-presets/{source_id}/copy", headers=auth_headers)
    copy = resp.json()["test_preset"]
    assert copy["id"] != source_id
    assert copy["user_id"] == user_id
    assert copy["type"] == "words"
    assert copy["words"] == 100
    assert copy["content"] == "QUOTES"
    assert copy["creator_image"] == "https://example.com/typist.png"

    owned = (await client.get(f"/api/v1/users/{username}/test-presets")).json()
    assert [e["node"]["id"] for e in owned["edges"]] == [copy["id"]]
    public = (await client.get("/api/v1/test-presets")).json()
    assert [e["node"]["id"] for e in public["edges"]] == [source_id]
