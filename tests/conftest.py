"""Global test fixtures for our-directory test suite."""

from __future__ import annotations

import os
from typing import Any

import pytest

from our_directory import (
    DirectoryController,
    DirectorySettings,
    InMemoryRoomProvider,
    InMemoryUserProvider,
    Role,
    Room,
    User,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "slow: Slow tests (>5s)")


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Any:
    """Remove all OUR_DIRECTORY_ environment variables."""
    from our_directory.config import clear_config_cache, clear_directory_config

    for key in list(os.environ.keys()):
        if key.startswith("OUR_DIRECTORY_"):
            monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    clear_directory_config()
    yield
    clear_config_cache()
    clear_directory_config()


# ============================================================================
# Model Factory Fixtures
# ============================================================================


@pytest.fixture
def user_factory() -> Any:
    """Factory for creating users."""

    def factory(username: str = "testinator", roles: set[Role] | None = None, **kwargs: Any) -> User:
        user = User.create(
            email=kwargs.get("email", f"{username}@example.com"),
            display_name=kwargs.get("display_name", "Test Test"),
            username=username,
            password=kwargs.get("password", "1234567"),
        )
        user.roles = set(roles or ())
        return user

    return factory


@pytest.fixture
def owner(user_factory) -> User:
    return user_factory("owner")


@pytest.fixture
def admin(user_factory) -> User:
    return user_factory("admin", roles={Role.ADMIN})


@pytest.fixture
def regular_user(user_factory) -> User:
    return user_factory("blubb")


@pytest.fixture
def settings() -> DirectorySettings:
    """Default settings, independent of the environment."""
    return DirectorySettings()


@pytest.fixture
def user_provider(owner, admin, regular_user) -> InMemoryUserProvider:
    return InMemoryUserProvider([owner, admin, regular_user])


@pytest.fixture
def room_provider() -> InMemoryRoomProvider:
    return InMemoryRoomProvider()


@pytest.fixture
def controller(user_provider, room_provider, settings) -> DirectoryController:
    return DirectoryController(user_provider, room_provider, settings=settings)


@pytest.fixture
def private_room(controller, owner) -> Room:
    return controller.generate_room("Testroom", owner.id)


@pytest.fixture
def public_room(controller, owner) -> Room:
    room = Room.create("Lobby", owner.id, private=False)
    controller.add_room(room)
    return room

