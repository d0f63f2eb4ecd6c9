"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from senkyoku.config import Settings
from senkyoku.core.errors import DirectoryUnavailable
from senkyoku.models.district import RoleRecord


class FakeGateway:
    """In-memory DirectoryGateway that records every call.

    ``fail_list`` makes list_roles raise; ``fail_remove`` / ``fail_add`` are
    role IDs whose writes raise DirectoryUnavailable.
    """

    def __init__(
        self,
        roles: Iterable[RoleRecord],
        *,
        fail_list: bool = False,
        fail_remove: Iterable[str] = (),
        fail_add: Iterable[str] = (),
    ) -> None:
        self.roles = list(roles)
        self.fail_list = fail_list
        self.fail_remove = set(fail_remove)
        self.fail_add = set(fail_add)
        self.calls: list[tuple[str, ...]] = []

    @property
    def writes(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] in {"add", "remove"}]

    async def list_roles(self) -> list[RoleRecord]:
        self.calls.append(("list",))
        if self.fail_list:
            raise DirectoryUnavailable("roles endpoint unreachable")
        return list(self.roles)

    async def remove_role(self, member_id: str, role_id: str) -> None:
        self.calls.append(("remove", member_id, role_id))
        if role_id in self.fail_remove:
            raise DirectoryUnavailable(f"remove {role_id} failed")

    async def add_role(self, member_id: str, role_id: str) -> None:
        self.calls.append(("add", member_id, role_id))
        if role_id in self.fail_add:
            raise DirectoryUnavailable(f"add {role_id} failed")


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(senkyoku_env="development", database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def guild_roles() -> list[RoleRecord]:
    """A guild with a handful of prefectures and districts 1 through 5."""
    return [
        RoleRecord(id="100", name="@everyone"),
        RoleRecord(id="200", name="東京都"),
        RoleRecord(id="201", name="鳥取県"),
        RoleRecord(id="202", name="大阪府"),
        RoleRecord(id="300", name="モデレーター"),
        RoleRecord(id="301", name="1区"),
        RoleRecord(id="302", name="2区"),
        RoleRecord(id="303", name="3区"),
        RoleRecord(id="304", name="4区"),
        RoleRecord(id="305", name="5区"),
        RoleRecord(id="400", name="区役所"),
    ]


@pytest.fixture
def make_gateway(guild_roles: list[RoleRecord]) -> Callable[..., FakeGateway]:
    """Factory for a FakeGateway over ``guild_roles`` unless roles are given."""

    def _make(roles: Iterable[RoleRecord] | None = None, **kwargs: object) -> FakeGateway:
        return FakeGateway(guild_roles if roles is None else roles, **kwargs)  # type: ignore[arg-type]

    return _make
