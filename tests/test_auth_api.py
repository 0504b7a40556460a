"""Auth endpoints: registration, sessions and the password lifecycle."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import select, update

from bootcamp_api.models.user import User
from tests.conftest import API, DEFAULT_PASSWORD, bootcamp_payload, set_role


def reset_token_from(email: dict) -> str:
    return email["body"].strip().rsplit("/", 1)[-1]


async def test_register_returns_token_and_user(client):
    response = await client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["data"]["username"] == "alice"
    assert body["data"]["role"] == "user"
    assert "password_hash" not in body["data"]
    assert response.cookies.get("token") == body["token"]


async def test_register_ignores_requested_role(client):
    response = await client.post(
        f"{API}/auth/register",
        json={
            "username": "mallory",
            "email": "mallory@x.com",
            "password": DEFAULT_PASSWORD,
            "role": "admin",
        },
    )

    assert response.status_code == 201
    assert response.json()["data"]["role"] == "user"


async def test_register_rejects_weak_password(client):
    response = await client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": "password"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("Password must be at least 8 characters long")


async def test_register_rejects_bad_username(client):
    response = await client.post(
        f"{API}/auth/register",
        json={"username": "a!", "email": "alice@x.com", "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 400


async def test_register_duplicates(client, make_user):
    await make_user("alice")

    same_email = await client.post(
        f"{API}/auth/register",
        json={"username": "alice2", "email": "alice@example.com", "password": DEFAULT_PASSWORD},
    )
    same_username = await client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "other@example.com", "password": DEFAULT_PASSWORD},
    )

    assert same_email.status_code == 400
    assert same_email.json()["message"] == "User already exists"
    assert same_username.status_code == 400
    assert "already taken" in same_username.json()["message"]


async def test_login(client, make_user):
    alice = await make_user("alice")

    ok = await client.post(
        f"{API}/auth/login", json={"email": alice["email"], "password": DEFAULT_PASSWORD}
    )
    wrong = await client.post(
        f"{API}/auth/login", json={"email": alice["email"], "password": "Wrong123!"}
    )
    unknown = await client.post(
        f"{API}/auth/login", json={"email": "nobody@example.com", "password": DEFAULT_PASSWORD}
    )

    assert ok.status_code == 200
    assert ok.json()["token"]
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Invalid credentials"
    assert unknown.status_code == 401


async def test_me_with_bearer_token(client, make_user):
    alice = await make_user("alice")

    response = await client.get(f"{API}/auth/me", headers=alice["headers"])

    assert response.status_code == 200
    assert response.json()["data"]["id"] == alice["id"]


async def test_me_with_session_cookie_and_logout(client, make_user):
    alice = await make_user("alice")
    await client.post(f"{API}/auth/login", json={"email": alice["email"], "password": DEFAULT_PASSWORD})

    me = await client.get(f"{API}/auth/me")
    assert me.status_code == 200
    assert me.json()["data"]["username"] == "alice"

    logout = await client.post(f"{API}/auth/logout")
    assert logout.status_code == 200

    client.cookies.clear()
    after = await client.get(f"{API}/auth/me")
    assert after.status_code == 401


async def test_me_requires_valid_session(client):
    missing = await client.get(f"{API}/auth/me")
    garbage = await client.get(f"{API}/auth/me", headers={"Authorization": "Bearer garbage"})

    assert missing.status_code == 401
    assert missing.json() == {"success": False, "message": "Not authorized, no token"}
    assert garbage.status_code == 401


async def test_token_of_deleted_user_is_rejected(client, make_user):
    admin = await make_user("admin", role="admin")
    bob = await make_user("bob")

    deleted = await client.delete(f"{API}/users/{bob['id']}", headers=admin["headers"])
    assert deleted.status_code == 200

    response = await client.get(f"{API}/auth/me", headers=bob["headers"])
    assert response.status_code == 401


async def test_update_password(client, make_user):
    alice = await make_user("alice")

    wrong = await client.put(
        f"{API}/auth/updatepassword",
        json={"current_password": "Nope1234!", "new_password": "Brandnew1!"},
        headers=alice["headers"],
    )
    ok = await client.put(
        f"{API}/auth/updatepassword",
        json={"current_password": DEFAULT_PASSWORD, "new_password": "Brandnew1!"},
        headers=alice["headers"],
    )
    client.cookies.clear()
    login = await client.post(
        f"{API}/auth/login", json={"email": alice["email"], "password": "Brandnew1!"}
    )

    assert wrong.status_code == 401
    assert ok.status_code == 200
    assert ok.json()["token"]
    assert login.status_code == 200


async def test_password_reset_is_single_use(client, make_user, email_sender):
    alice = await make_user("alice")

    forgot = await client.post(f"{API}/auth/forgotpassword", json={"email": alice["email"]})
    assert forgot.status_code == 200
    assert forgot.json()["data"] == "Email sent"
    assert len(email_sender.sent) == 1
    assert email_sender.sent[0]["recipient"] == alice["email"]
    assert f"{API}/auth/resetpassword/" in email_sender.sent[0]["body"]

    token = reset_token_from(email_sender.sent[0])
    first = await client.put(
        f"{API}/auth/resetpassword/{token}", json={"password": "Resetted1!"}
    )
    second = await client.put(
        f"{API}/auth/resetpassword/{token}", json={"password": "Another12!"}
    )
    client.cookies.clear()
    login = await client.post(
        f"{API}/auth/login", json={"email": alice["email"], "password": "Resetted1!"}
    )

    assert first.status_code == 200
    assert first.json()["token"]
    assert second.status_code == 400
    assert second.json()["message"] == "Invalid or expired token"
    assert login.status_code == 200


async def test_expired_reset_token_is_rejected(client, make_user, email_sender, session_factory):
    alice = await make_user("alice")
    await client.post(f"{API}/auth/forgotpassword", json={"email": alice["email"]})
    token = reset_token_from(email_sender.sent[0])

    expired = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(minutes=1)
    async with session_factory() as session:
        await session.execute(
            update(User).where(User.id == UUID(alice["id"])).values(reset_password_expires=expired)
        )
        await session.commit()

    response = await client.put(f"{API}/auth/resetpassword/{token}", json={"password": "Resetted1!"})

    assert response.status_code == 400


async def test_forgot_password_email_failure_clears_token(
    client, make_user, email_sender, session_factory
):
    alice = await make_user("alice")
    email_sender.fail = True

    response = await client.post(f"{API}/auth/forgotpassword", json={"email": alice["email"]})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Email could not be sent"}
    async with session_factory() as session:
        user = (await session.execute(select(User).where(User.id == UUID(alice["id"])))).scalar_one()
        assert user.reset_password_token is None
        assert user.reset_password_expires is None


async def test_forgot_password_unknown_email(client):
    response = await client.post(f"{API}/auth/forgotpassword", json={"email": "ghost@example.com"})

    assert response.status_code == 404


async def test_change_role_is_admin_only(client, make_user):
    admin = await make_user("admin", role="admin")
    alice = await make_user("alice")

    denied = await client.put(
        f"{API}/auth/{alice['id']}/role", json={"role": "moderator"}, headers=alice["headers"]
    )
    invalid = await client.put(
        f"{API}/auth/{alice['id']}/role", json={"role": "overlord"}, headers=admin["headers"]
    )
    changed = await client.put(
        f"{API}/auth/{alice['id']}/role", json={"role": "moderator"}, headers=admin["headers"]
    )

    assert denied.status_code == 403
    assert invalid.status_code == 400
    assert changed.status_code == 200
    assert changed.json()["data"]["role"] == "moderator"


async def test_alice_scenario(client, session_factory):
    register = await client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": DEFAULT_PASSWORD},
    )
    assert register.status_code == 201
    client.cookies.clear()

    login = await client.post(
        f"{API}/auth/login", json={"email": "alice@x.com", "password": DEFAULT_PASSWORD}
    )
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['token']}"}
    client.cookies.clear()

    forbidden = await client.post(
        f"{API}/bootcamps", json=bootcamp_payload("Alice Academy"), headers=headers
    )
    assert forbidden.status_code == 403

    await set_role(session_factory, register.json()["data"]["id"], "moderator")

    created = await client.post(
        f"{API}/bootcamps",
        json=bootcamp_payload("Alice Academy", duration=10, start_date="2026-01-05T00:00:00"),
        headers=headers,
    )
    assert created.status_code == 201
    bootcamp = created.json()["data"]
    assert bootcamp["slug"] == "alice-academy"
    assert bootcamp["end_date"].startswith("2026-03-16")
