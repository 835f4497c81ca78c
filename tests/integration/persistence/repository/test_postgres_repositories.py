"""Integration tests for the PostgreSQL repositories.

These tests need PostgreSQL reachable at DATABASE__URL with migrations
applied (scripts/run_migrations.py). They are skipped otherwise.
"""

import os
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from prp.domain.error import CodeExhaustedError
from prp.domain.model import EndorsementRequest, InviteCode, PressRelease
from prp.domain.model.common import utcnow
from prp.domain.repository import (
    AccountRepository,
    EndorsementRequestRepository,
    InviteCodeRepository,
    PressReleaseRepository,
)
from prp.domain.service import InviteCodeService
from prp.domain.value import (
    AccountId,
    EndorsementRequestId,
    EndorsementStatus,
    InviteToken,
    PressReleaseId,
    PressReleaseStatus,
    TrustState,
)
from tests.conftest import make_account, press_release_fields
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
    ),
]

# Integration test fixture - real Postgres
integration_env = create_env_fixture(unmock={"persistence"})


def _unique(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


async def _account(env, trust_state: TrustState = TrustState.APPROVED):
    repo = await env.get(AccountRepository)
    account_id = _unique("uid")
    return await make_account(repo, account_id, f"{account_id}@example.org", trust_state)


class TestAccountRepository:
    """Integration tests for PostgresAccountRepository."""

    @pytest.mark.asyncio
    async def test_round_trip_and_email_lookup(self, integration_env):
        """Stored accounts should come back by ID and by email."""
        # Arrange
        repo = await integration_env.get(AccountRepository)
        account = await _account(integration_env, TrustState.PENDING_REVIEW)

        # Act
        by_id = await repo.find_by_id(account.id)
        by_email = await repo.find_by_email(account.email)

        # Assert
        assert by_id.id == account.id
        assert by_email.id == account.id
        assert by_id.trust_state == TrustState.PENDING_REVIEW

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_integrity_error(self, integration_env):
        """Adding the same principal twice should violate the primary key."""
        repo = await integration_env.get(AccountRepository)
        account = await _account(integration_env)

        with pytest.raises(IntegrityError):
            await repo.add(account)

        # The savepoint keeps the session usable
        assert await repo.find_by_id(account.id) is not None

    @pytest.mark.asyncio
    async def test_update_trust_state(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        account = await _account(integration_env, TrustState.PENDING_REVIEW)

        updated = await repo.update_trust_state(account.id, TrustState.REJECTED)

        assert updated.trust_state == TrustState.REJECTED
        assert await repo.update_trust_state(AccountId("missing"), TrustState.APPROVED) is None

    @pytest.mark.asyncio
    async def test_record_endorsement_keeps_trust_state(self, integration_env):
        """Crediting an endorser only touches the counters."""
        repo = await integration_env.get(AccountRepository)
        account = await _account(integration_env)
        await repo.update_trust_state(account.id, TrustState.REJECTED)
        now = utcnow()

        first = await repo.record_endorsement(account.id, now, 30)
        second = await repo.record_endorsement(account.id, now, 30)

        assert second.trust_state == TrustState.REJECTED
        assert second.reputation_score == first.reputation_score + 1
        assert second.endorsements_given_this_period == 2

    @pytest.mark.asyncio
    async def test_record_endorsement_starts_new_period(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        account = await _account(integration_env)
        later = account.period_reset_at + timedelta(days=1)

        updated = await repo.record_endorsement(account.id, later, 30)

        assert updated.endorsements_given_this_period == 1
        assert updated.period_reset_at == later + timedelta(days=30)


class TestInviteCodeRepository:
    """Integration tests for PostgresInviteCodeRepository."""

    @pytest.mark.asyncio
    async def test_find_by_code_extracts_root_value(self, integration_env):
        """Lookups should query by the plain code string."""
        # Arrange
        repo = await integration_env.get(InviteCodeRepository)
        issuer = await _account(integration_env)
        code = InviteToken(_unique("PRP").upper())
        await repo.add(InviteCode(code=code, issued_by=issuer.id, max_uses=2))

        # Act
        found = await repo.find_by_code(code)

        # Assert
        assert found is not None
        assert found.code == code
        assert found.remaining_uses == 2

    @pytest.mark.asyncio
    async def test_consume_is_conditional(self, integration_env):
        """The last use deactivates the code; further consumes fail."""
        repo = await integration_env.get(InviteCodeRepository)
        issuer = await _account(integration_env)
        code = InviteToken(_unique("PRP").upper())
        await repo.add(InviteCode(code=code, issued_by=issuer.id, max_uses=1))

        first = await repo.try_consume_use(code, utcnow())
        second = await repo.try_consume_use(code, utcnow())

        assert first.current_uses == 1
        assert first.active is False
        assert second is None

        released = await repo.release_use(code)
        assert released.current_uses == 0
        assert released.active is True

    @pytest.mark.asyncio
    async def test_expired_code_not_consumed(self, integration_env):
        repo = await integration_env.get(InviteCodeRepository)
        issuer = await _account(integration_env)
        code = InviteToken(_unique("PRP").upper())
        await repo.add(
            InviteCode(
                code=code,
                issued_by=issuer.id,
                expires_at=utcnow() + timedelta(minutes=1),
            )
        )

        assert await repo.try_consume_use(code, utcnow() + timedelta(minutes=2)) is None

    @pytest.mark.asyncio
    async def test_single_use_code_through_service(self, integration_env):
        """A single-use code elevates its first redeemer only."""
        # Arrange
        service = await integration_env.get(InviteCodeService)
        issuer = await _account(integration_env)
        first = await _account(integration_env, TrustState.PENDING_REVIEW)
        invite = await service.issue(issued_by=issuer.id, max_uses=1)
        second = await _account(integration_env, TrustState.PENDING_REVIEW)

        # Act
        result = await service.redeem(invite.code, first.id)

        # Assert
        assert result.elevated is True
        assert result.remaining_uses == 0
        with pytest.raises(CodeExhaustedError):
            await service.redeem(invite.code, second.id)

    @pytest.mark.asyncio
    async def test_add_taken_code_returns_none(self, integration_env):
        """A clash on the code is reported without breaking the session."""
        repo = await integration_env.get(InviteCodeRepository)
        issuer = await _account(integration_env)
        code = InviteToken(_unique("PRP").upper())
        await repo.add(InviteCode(code=code, issued_by=issuer.id, max_uses=1))

        clash = await repo.add(InviteCode(code=code, issued_by=issuer.id, max_uses=3))

        assert clash is None
        stored = await repo.find_by_code(code)
        assert stored.max_uses == 1

    @pytest.mark.asyncio
    async def test_moderator_without_account_can_issue(self, integration_env):
        """Codes from a configured moderator with no account row are stored."""
        # Arrange
        service = await integration_env.get(InviteCodeService)
        moderator_id = AccountId(_unique("uid-mod"))

        # Act
        invite = await service.issue(issued_by=moderator_id, max_uses=10, prefix="MOD")

        # Assert
        assert invite.code.root.startswith("MOD-")
        issued = await service.list_issued(moderator_id)
        assert [c.code for c in issued] == [invite.code]


class TestEndorsementRequestRepository:
    """Integration tests for PostgresEndorsementRequestRepository."""

    @pytest.mark.asyncio
    async def test_only_one_pending_request_per_pair(self, integration_env):
        """The partial unique index should reject a second pending request."""
        repo = await integration_env.get(EndorsementRequestRepository)
        requester = await _account(integration_env, TrustState.PENDING_REVIEW)
        target = await _account(integration_env)

        def _request() -> EndorsementRequest:
            return EndorsementRequest(
                id=EndorsementRequestId(uuid4()),
                requester_id=requester.id,
                target_id=target.id,
                status=EndorsementStatus.PENDING,
                message="Please vouch for me",
                created_at=utcnow(),
            )

        first = await repo.add(_request())
        with pytest.raises(IntegrityError):
            await repo.add(_request())

        assert await repo.exists_pending(requester.id, target.id)

        resolved = await repo.resolve(first.id, EndorsementStatus.DECLINED, utcnow())
        assert resolved.status == EndorsementStatus.DECLINED
        assert await repo.resolve(first.id, EndorsementStatus.ACCEPTED, utcnow()) is None

        # Once resolved, a new request for the pair is allowed
        await repo.add(_request())

    @pytest.mark.asyncio
    async def test_reopen_is_conditional_on_status(self, integration_env):
        repo = await integration_env.get(EndorsementRequestRepository)
        requester = await _account(integration_env, TrustState.PENDING_REVIEW)
        target = await _account(integration_env)
        request = await repo.add(
            EndorsementRequest(
                id=EndorsementRequestId(uuid4()),
                requester_id=requester.id,
                target_id=target.id,
                status=EndorsementStatus.PENDING,
                message="Please vouch for me",
                created_at=utcnow(),
            )
        )
        await repo.resolve(request.id, EndorsementStatus.ACCEPTED, utcnow())

        assert await repo.reopen(request.id, EndorsementStatus.DECLINED) is None
        reopened = await repo.reopen(request.id, EndorsementStatus.ACCEPTED)

        assert reopened.status == EndorsementStatus.PENDING
        assert reopened.resolved_at is None


class TestPressReleaseRepository:
    """Integration tests for PostgresPressReleaseRepository."""

    @pytest.mark.asyncio
    async def test_save_update_status_and_delete(self, integration_env):
        repo = await integration_env.get(PressReleaseRepository)
        owner = await _account(integration_env)
        press_release = PressRelease(
            id=PressReleaseId(uuid4()),
            owner_id=owner.id,
            created_at=utcnow(),
            **press_release_fields(),
        )

        await repo.save(press_release)
        approved = await repo.update_status(press_release.id, PressReleaseStatus.APPROVED)
        public = await repo.find_by_status(PressReleaseStatus.APPROVED, limit=1000)

        assert approved.status == PressReleaseStatus.APPROVED
        assert press_release.id in {pr.id for pr in public}
        assert [pr.id for pr in await repo.find_by_owner(owner.id)] == [press_release.id]

        assert await repo.delete(press_release.id) is True
        assert await repo.find_by_id(press_release.id) is None
