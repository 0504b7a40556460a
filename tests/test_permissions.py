"""Access control decisions."""

import uuid
from types import SimpleNamespace

import pytest

from bootcamp_api.core.exceptions import ForbiddenError
from bootcamp_api.core.permissions import Action, Decision, Resource, authorize, evaluate

OWNER = uuid.uuid4()
OTHER = uuid.uuid4()


@pytest.mark.parametrize(
    "role,expected",
    [("admin", Decision.ALLOW), ("moderator", Decision.ALLOW), ("user", Decision.DENY)],
)
def test_bootcamp_creation_is_role_gated(role, expected):
    assert evaluate(role, OWNER, Resource.BOOTCAMP, Action.CREATE) == expected


@pytest.mark.parametrize("resource", [Resource.BOOTCAMP, Resource.COURSE, Resource.REVIEW])
@pytest.mark.parametrize("action", [Action.UPDATE, Action.DELETE])
def test_owner_may_change_own_resource(resource, action):
    assert evaluate("user", OWNER, resource, action, owner_id=OWNER) == Decision.ALLOW


@pytest.mark.parametrize("resource", [Resource.BOOTCAMP, Resource.COURSE, Resource.REVIEW])
@pytest.mark.parametrize("role", ["user", "moderator"])
def test_non_owner_may_not_change_resource(resource, role):
    assert evaluate(role, OTHER, resource, Action.UPDATE, owner_id=OWNER) == Decision.DENY
    assert evaluate(role, OTHER, resource, Action.DELETE, owner_id=OWNER) == Decision.DENY


@pytest.mark.parametrize("resource", [Resource.BOOTCAMP, Resource.COURSE, Resource.REVIEW])
def test_admin_may_change_any_resource(resource):
    assert evaluate("admin", OTHER, resource, Action.DELETE, owner_id=OWNER) == Decision.ALLOW


def test_course_creation_requires_bootcamp_ownership():
    assert evaluate("moderator", OWNER, Resource.COURSE, Action.CREATE, owner_id=OWNER) == Decision.ALLOW
    assert evaluate("moderator", OTHER, Resource.COURSE, Action.CREATE, owner_id=OWNER) == Decision.DENY
    assert evaluate("admin", OTHER, Resource.COURSE, Action.CREATE, owner_id=OWNER) == Decision.ALLOW


def test_anyone_but_the_bootcamp_owner_may_review():
    assert evaluate("user", OTHER, Resource.REVIEW, Action.CREATE, owner_id=OWNER) == Decision.ALLOW
    assert evaluate("user", OWNER, Resource.REVIEW, Action.CREATE, owner_id=OWNER) == Decision.DENY


def test_admin_cannot_review_own_bootcamp():
    assert evaluate("admin", OWNER, Resource.REVIEW, Action.CREATE, owner_id=OWNER) == Decision.DENY


def test_only_admin_manages_users():
    assert evaluate("admin", OWNER, Resource.USER, Action.CREATE) == Decision.ALLOW
    assert evaluate("moderator", OWNER, Resource.USER, Action.CREATE) == Decision.DENY
    assert evaluate("user", OWNER, Resource.USER, Action.DELETE, owner_id=OWNER) == Decision.DENY


def test_authorize_raises_forbidden_with_message():
    actor = SimpleNamespace(id=OTHER, role="user")

    with pytest.raises(ForbiddenError) as exc_info:
        authorize(actor, Resource.BOOTCAMP, Action.UPDATE, owner_id=OWNER)

    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "User not authorized to update this bootcamp"


def test_authorize_passes_for_owner():
    actor = SimpleNamespace(id=OWNER, role="user")

    authorize(actor, Resource.REVIEW, Action.DELETE, owner_id=OWNER)
