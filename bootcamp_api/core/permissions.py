"""
Access control: role gates combined with ownership checks.

``evaluate`` is a pure function of the actor's role and id, the resource type,
the action and the resolved owner id. Callers resolve the target (and answer
404) before asking.

Ownership per resource:
- Bootcamp: the bootcamp's ``user_id``
- Course: the course creator for update/delete, the parent bootcamp's owner
  for create
- Review: the author for update/delete, the parent bootcamp's owner for create
"""

from enum import Enum
from typing import Any, Optional

from bootcamp_api.core.exceptions import ForbiddenError
from bootcamp_api.core.security import Role


class Resource(str, Enum):
    BOOTCAMP = "bootcamp"
    COURSE = "course"
    REVIEW = "review"
    USER = "user"


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


# Resources whose owner may update/delete them
OWNED_RESOURCES = {Resource.BOOTCAMP, Resource.COURSE, Resource.REVIEW}

# Role gates for creation; resources missing here fall back to ownership
CREATE_ROLES = {
    Resource.BOOTCAMP: {Role.ADMIN, Role.MODERATOR},
    Resource.USER: {Role.ADMIN},
}


def evaluate(
    actor_role: str,
    actor_id: Any,
    resource: Resource,
    action: Action,
    owner_id: Optional[Any] = None,
) -> Decision:
    """Decide whether the actor may perform ``action`` on ``resource``."""
    role = Role(actor_role)
    is_owner = owner_id is not None and actor_id == owner_id

    # No self-review, admins included
    if resource == Resource.REVIEW and action == Action.CREATE:
        return Decision.DENY if is_owner else Decision.ALLOW

    if role == Role.ADMIN:
        return Decision.ALLOW

    if action == Action.CREATE:
        if resource in CREATE_ROLES:
            return Decision.ALLOW if role in CREATE_ROLES[resource] else Decision.DENY
        return Decision.ALLOW if is_owner else Decision.DENY

    if resource in OWNED_RESOURCES and is_owner:
        return Decision.ALLOW

    return Decision.DENY


def authorize(
    actor,
    resource: Resource,
    action: Action,
    owner_id: Optional[Any] = None,
    message: Optional[str] = None,
) -> None:
    """Raise ``ForbiddenError`` unless ``evaluate`` allows the actor."""
    decision = evaluate(actor.role, actor.id, resource, action, owner_id)
    if decision == Decision.DENY:
        raise ForbiddenError(
            message or f"User not authorized to {action.value} this {resource.value}"
        )
