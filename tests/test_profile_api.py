"""Profile endpoints."""

from uuid import UUID

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm.attributes import set_committed_value

from bootcamp_api.core.exceptions import BadRequestError
from bootcamp_api.models.profile import Profile
from bootcamp_api.models.user import User
from bootcamp_api.schemas.profile import ProfileCreate
from bootcamp_api.services.profile_service import ProfileService
from tests.conftest import API

PROFILE = {
    "firstname": "Alice",
    "lastname": "Liddell",
    "gender": "female",
    "phone": "+447700900123",
    "country": "United Kingdom",
}


async def test_profile_lifecycle(client, make_user):
    alice = await make_user("alice")

    before = await client.get(f"{API}/profile", headers=alice["headers"])
    created = await client.post(f"{API}/profile", json=PROFILE, headers=alice["headers"])
    again = await client.post(f"{API}/profile", json=PROFILE, headers=alice["headers"])
    updated = await client.put(f"{API}/profile", json={"country": "Wonderland"}, headers=alice["headers"])
    fetched = await client.get(f"{API}/profile", headers=alice["headers"])
    me = await client.get(f"{API}/auth/me", headers=alice["headers"])

    assert before.status_code == 404
    assert created.status_code == 201
    assert created.json()["data"]["firstname"] == "Alice"
    assert again.status_code == 400
    assert updated.status_code == 200
    assert updated.json()["data"]["country"] == "Wonderland"
    assert updated.json()["data"]["lastname"] == "Liddell"
    assert fetched.json()["data"]["country"] == "Wonderland"
    assert me.json()["data"]["profile"]["firstname"] == "Alice"


async def test_update_without_profile(client, make_user):
    alice = await make_user("alice")

    response = await client.put(f"{API}/profile", json={"country": "Wonderland"}, headers=alice["headers"])

    assert response.status_code == 404


async def test_profile_validation(client, make_user):
    alice = await make_user("alice")

    response = await client.post(
        f"{API}/profile", json={**PROFILE, "gender": "unknown"}, headers=alice["headers"]
    )

    assert response.status_code == 400


async def test_profile_requires_session(client):
    assert (await client.get(f"{API}/profile")).status_code == 401


async def test_owner_name_appears_on_bootcamp(client, make_user, make_bootcamp):
    mod = await make_user("mod", role="moderator")
    await client.post(f"{API}/profile", json=PROFILE, headers=mod["headers"])

    bootcamp = await make_bootcamp(mod)

    assert bootcamp["owner"]["profile"] == {"firstname": "Alice", "lastname": "Liddell"}


async def test_second_profile_for_stale_user_is_rejected(client, make_user, db_session):
    alice = await make_user("alice")
    created = await client.post(f"{API}/profile", json=PROFILE, headers=alice["headers"])
    assert created.status_code == 201

    # A second request that read the user before the first one linked its profile
    user = await db_session.get(User, UUID(alice["id"]))
    set_committed_value(user, "profile_id", None)

    with pytest.raises(BadRequestError):
        await ProfileService(db_session).create_profile(user, ProfileCreate(**PROFILE))

    assert await db_session.scalar(select(func.count()).select_from(Profile)) == 1
    me = await client.get(f"{API}/auth/me", headers=alice["headers"])
    assert me.json()["data"]["profile"]["id"] == created.json()["data"]["id"]
