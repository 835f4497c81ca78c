"""Test harness.

Unit tests run against in-memory repositories and the mock identity
provider. Integration tests unmock persistence and need PostgreSQL reachable
at DATABASE__URL with migrations applied.
"""

import pytest_asyncio

from prp.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    The fixture builds a fresh container and yields a request-scoped child,
    so every test sees its own repositories.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_signup(unit_env):
            service = await unit_env.get(AccountService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
