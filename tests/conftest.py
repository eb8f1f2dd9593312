"""
Shared test fixtures.
"""

from dataclasses import dataclass, field

import pytest

from boxer.config import BoxerConfig
from boxer.registry import BoxRegistry
from boxer.testing import CallRecorder

# === Test Objects ===


@dataclass
class TestUser:
    __test__ = False

    id: int
    name: str
    email: str
    is_admin: bool = False
    friends: list[int] = field(default_factory=list)


# === Box Definitions ===


def define_user_box(box):
    """A user box with public, private and admin views."""
    box.helper("avatar_url", lambda user: f"/avatars/{user.id}.png")

    @box.view("base")
    def base(h, user, viewer=None):
        return {"id": user.id, "name": user.name}

    @box.view("public", extends="base")
    def public(h, user, viewer=None):
        return {"avatar": h.avatar_url(user), "friend_count": len(user.friends)}

    box.helper("display_email", lambda user: user.email.lower())

    @box.view("private", extends="public")
    def private(h, user, viewer=None):
        return {"email": h.display_email(user)}

    @box.precondition
    def viewer_is_self(user, viewer=None):
        return viewer is not None and viewer.id == user.id

    @box.view("admin", extends="private")
    def admin(h, user, viewer=None):
        return {"is_admin": user.is_admin, "name": user.name.upper()}

    @box.precondition
    def viewer_is_admin(user, viewer=None):
        return viewer is not None and viewer.is_admin


# === Fixtures ===


@pytest.fixture
def registry():
    """A fresh registry with quiet logging."""
    return BoxRegistry(config=BoxerConfig(log_shipments=False))


@pytest.fixture
def user_registry(registry):
    """Registry with the user box defined."""
    registry.define("user", define_user_box)
    return registry


@pytest.fixture
def alice():
    return TestUser(id=1, name="Alice", email="Alice@Example.com", friends=[2, 3])


@pytest.fixture
def bob():
    return TestUser(id=2, name="Bob", email="bob@example.com", is_admin=True)


@pytest.fixture
def recorder():
    return CallRecorder()
