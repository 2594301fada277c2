"""Ownership and role checks for bootcamp and course mutations.

Callers look the target up first (a missing resource is a 404), then ask
``authorize`` whether the actor may act on it. Nothing here touches the
database; the one fact that needs a query, whether the actor already owns a
bootcamp, is handed in by the caller.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from devcamper.models import Bootcamp, Course, User
from devcamper.utils.errorResponse import (
    DuplicateOwnership,
    NotAuthorized,
    Unauthenticated,
)

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    kind: Optional[str] = None
    reason: Optional[str] = None

    def raise_for_denial(self):
        if self.allowed:
            return
        error = {
            "Unauthenticated": Unauthenticated,
            "DuplicateOwnership": DuplicateOwnership,
        }.get(self.kind, NotAuthorized)
        raise error(self.reason)


ALLOW = Decision(allowed=True)


def owner_of(resource) -> Optional[int]:
    if isinstance(resource, (Bootcamp, Course)):
        return resource.user_id
    raise TypeError(f"Cannot determine the owner of {resource!r}")


def _describe(resource, action: Action, actor: User) -> str:
    if isinstance(resource, Bootcamp):
        if action is Action.CREATE:
            return (
                f"User {actor.id} not authorized to add a course "
                f"to bootcamp {resource.id}"
            )
        return f"User {actor.id} not authorized to {action.value} this bootcamp"
    return f"User {actor.id} not authorized to {action.value} course {resource.id}"


def authorize(
    actor: Optional[User],
    resource,
    action: Action,
    owned_bootcamp: Optional[Bootcamp] = None,
) -> Decision:
    """Decide whether ``actor`` may perform ``action`` on ``resource``.

    ``resource`` is the ``Bootcamp`` class when creating a bootcamp, the
    parent bootcamp when creating a course, and the target row otherwise.
    ``owned_bootcamp`` is the bootcamp the actor already owns, if any; it is
    only consulted when creating a bootcamp.
    """
    if action is Action.READ:
        return ALLOW

    if actor is None:
        return Decision(False, "Unauthenticated", "Not authorized to access this route")

    if actor.role == "admin":
        return ALLOW

    if resource is Bootcamp:
        if action is not Action.CREATE:
            raise ValueError(f"{action.value} needs a bootcamp instance")
        if owned_bootcamp is not None:
            return Decision(
                False,
                "DuplicateOwnership",
                f"The user with ID {actor.id} has already published a bootcamp",
            )
        return ALLOW

    if owner_of(resource) != actor.id:
        logger.info(
            "Denied %s on %s %s for user %s",
            action.value,
            type(resource).__name__,
            resource.id,
            actor.id,
        )
        return Decision(False, "NotOwner", _describe(resource, action, actor))

    return ALLOW


def ensure_authorized(
    actor: Optional[User],
    resource,
    action: Action,
    owned_bootcamp: Optional[Bootcamp] = None,
) -> None:
    authorize(actor, resource, action, owned_bootcamp).raise_for_denial()
