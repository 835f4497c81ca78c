"""Unit tests for the endorsement use cases."""

import pytest

from prp.application.usecase.endorsement import (
    ListEndorsementsRequest,
    ListEndorsementsUseCase,
    RequestEndorsementRequest,
    RequestEndorsementUseCase,
    ResolveEndorsementRequest,
    ResolveEndorsementUseCase,
)
from prp.domain.error import NotFoundError
from prp.domain.repository import AccountRepository
from prp.domain.value import (
    AccountId,
    EndorsementDecision,
    EndorsementStatus,
    TrustState,
)
from tests.conftest import make_account
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _pair(unit_env) -> AccountRepository:
    repo = await unit_env.get(AccountRepository)
    await make_account(repo, "newbie", "newbie@example.org")
    await make_account(repo, "member", "member@example.org", TrustState.APPROVED)
    return repo


class TestEndorsementFlow:
    """Tests for the endorsement request flow."""

    @pytest.mark.asyncio
    async def test_request_list_and_accept(self, unit_env):
        repo = await _pair(unit_env)
        request_uc = await unit_env.get(RequestEndorsementUseCase)
        list_uc = await unit_env.get(ListEndorsementsUseCase)
        resolve_uc = await unit_env.get(ResolveEndorsementUseCase)

        created = await request_uc.execute(
            RequestEndorsementRequest(user_id="newbie", target="Member@Example.org")
        )
        incoming = await list_uc.execute(ListEndorsementsRequest(user_id="member"))
        resolved = await resolve_uc.execute(
            ResolveEndorsementRequest(
                user_id="member",
                request_id=created.id,
                decision=EndorsementDecision.ACCEPT,
            )
        )

        assert created.target_id == "member"
        assert created.message
        assert [r.id for r in incoming.requests] == [created.id]
        assert resolved.status == EndorsementStatus.ACCEPTED
        newbie = await repo.find_by_id(AccountId("newbie"))
        assert newbie.trust_state == TrustState.APPROVED

    @pytest.mark.asyncio
    async def test_outgoing_listing(self, unit_env):
        await _pair(unit_env)
        request_uc = await unit_env.get(RequestEndorsementUseCase)
        list_uc = await unit_env.get(ListEndorsementsUseCase)
        created = await request_uc.execute(
            RequestEndorsementRequest(user_id="newbie", target="member", message="Hi")
        )

        outgoing = await list_uc.execute(
            ListEndorsementsRequest(user_id="newbie", direction="outgoing")
        )

        assert [r.id for r in outgoing.requests] == [created.id]
        assert outgoing.requests[0].message == "Hi"

    @pytest.mark.asyncio
    async def test_malformed_request_id(self, unit_env):
        resolve_uc = await unit_env.get(ResolveEndorsementUseCase)

        with pytest.raises(NotFoundError):
            await resolve_uc.execute(
                ResolveEndorsementRequest(
                    user_id="member",
                    request_id="nope",
                    decision=EndorsementDecision.DECLINE,
                )
            )
