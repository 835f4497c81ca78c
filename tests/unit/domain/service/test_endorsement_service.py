"""Unit tests for EndorsementService."""

import pytest

from prp.config import EndorsementSettings
from prp.domain.error import (
    AlreadyResolvedError,
    ConflictError,
    DuplicatePendingRequestError,
    EndorsementQuotaExceededError,
    NotAuthorizedError,
    SelfEndorsementError,
    TargetNotApprovedError,
    TransientStoreError,
    ValidationError,
)
from prp.domain.repository import AccountRepository, EndorsementRequestRepository
from prp.domain.service import AccountService, EndorsementService
from prp.domain.value import (
    AccountId,
    EndorsementDecision,
    EndorsementStatus,
    TrustState,
)
from tests.conftest import make_account
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _members(unit_env) -> None:
    """A pending requester and an approved endorser."""
    repo = await unit_env.get(AccountRepository)
    await make_account(repo, "requester", "new@example.org")
    await make_account(repo, "endorser", "vet@example.org", TrustState.APPROVED)


class TestCreate:
    """Tests for create."""

    @pytest.mark.asyncio
    async def test_create_by_email(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)

        request = await service.create(AccountId("requester"), "VET@example.org")

        assert request.target_id == "endorser"
        assert request.status == EndorsementStatus.PENDING
        assert request.message == EndorsementSettings().default_message

    @pytest.mark.asyncio
    async def test_create_by_account_id_with_message(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)

        request = await service.create(
            AccountId("requester"), "endorser", "  We worked together at ACME. "
        )

        assert request.target_id == "endorser"
        assert request.message == "We worked together at ACME."

    @pytest.mark.asyncio
    async def test_duplicate_pending_is_conflict(self, unit_env):
        """Only one pending request per requester and target."""
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)
        await service.create(AccountId("requester"), "vet@example.org")

        with pytest.raises(DuplicatePendingRequestError) as exc_info:
            await service.create(AccountId("requester"), "vet@example.org")
        assert isinstance(exc_info.value, ConflictError)

    @pytest.mark.asyncio
    async def test_new_request_allowed_after_decline(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)
        first = await service.create(AccountId("requester"), "vet@example.org")
        await service.resolve(first.id, AccountId("endorser"), EndorsementDecision.DECLINE)

        second = await service.create(AccountId("requester"), "vet@example.org")

        assert second.id != first.id
        assert second.status == EndorsementStatus.PENDING

    @pytest.mark.asyncio
    async def test_self_endorsement_rejected(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)

        with pytest.raises(SelfEndorsementError):
            await service.create(AccountId("requester"), "new@example.org")

    @pytest.mark.asyncio
    async def test_unapproved_target_rejected(self, unit_env):
        service = await unit_env.get(EndorsementService)
        repo = await unit_env.get(AccountRepository)
        await _members(unit_env)
        await make_account(repo, "other", "other@example.org")

        with pytest.raises(TargetNotApprovedError):
            await service.create(AccountId("requester"), "other@example.org")

    @pytest.mark.asyncio
    async def test_unknown_target_rejected(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)

        with pytest.raises(TargetNotApprovedError):
            await service.create(AccountId("requester"), "ghost@example.org")

    @pytest.mark.asyncio
    async def test_blank_target_rejected(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)

        with pytest.raises(ValidationError):
            await service.create(AccountId("requester"), "   ")

    @pytest.mark.asyncio
    async def test_approved_requester_rejected(self, unit_env):
        service = await unit_env.get(EndorsementService)
        repo = await unit_env.get(AccountRepository)
        await _members(unit_env)
        await make_account(repo, "vet2", "vet2@example.org", TrustState.APPROVED)

        with pytest.raises(NotAuthorizedError):
            await service.create(AccountId("vet2"), "vet@example.org")


class TestResolve:
    """Tests for resolve."""

    @pytest.mark.asyncio
    async def test_accept_elevates_requester(self, unit_env):
        service = await unit_env.get(EndorsementService)
        account_service = await unit_env.get(AccountService)
        await _members(unit_env)
        request = await service.create(AccountId("requester"), "vet@example.org")

        resolved = await service.resolve(
            request.id, AccountId("endorser"), EndorsementDecision.ACCEPT
        )

        assert resolved.status == EndorsementStatus.ACCEPTED
        assert resolved.resolved_at is not None
        requester = await account_service.get_by_id(AccountId("requester"))
        assert requester.trust_state == TrustState.APPROVED
        endorser = await account_service.get_by_id(AccountId("endorser"))
        assert endorser.reputation_score == 1
        assert endorser.endorsements_given_this_period == 1

    @pytest.mark.asyncio
    async def test_decline_leaves_requester_pending(self, unit_env):
        service = await unit_env.get(EndorsementService)
        account_service = await unit_env.get(AccountService)
        await _members(unit_env)
        request = await service.create(AccountId("requester"), "vet@example.org")

        resolved = await service.resolve(
            request.id, AccountId("endorser"), EndorsementDecision.DECLINE
        )

        assert resolved.status == EndorsementStatus.DECLINED
        requester = await account_service.get_by_id(AccountId("requester"))
        assert requester.trust_state == TrustState.PENDING_REVIEW

    @pytest.mark.asyncio
    async def test_only_target_can_resolve(self, unit_env):
        service = await unit_env.get(EndorsementService)
        repo = await unit_env.get(EndorsementRequestRepository)
        await _members(unit_env)
        request = await service.create(AccountId("requester"), "vet@example.org")

        with pytest.raises(NotAuthorizedError):
            await service.resolve(
                request.id, AccountId("requester"), EndorsementDecision.ACCEPT
            )

        stored = await repo.find_by_id(request.id)
        assert stored.status == EndorsementStatus.PENDING

    @pytest.mark.asyncio
    async def test_resolution_is_terminal(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)
        request = await service.create(AccountId("requester"), "vet@example.org")
        await service.resolve(
            request.id, AccountId("endorser"), EndorsementDecision.DECLINE
        )

        with pytest.raises(AlreadyResolvedError):
            await service.resolve(
                request.id, AccountId("endorser"), EndorsementDecision.ACCEPT
            )

    @pytest.mark.asyncio
    async def test_quota_enforced_when_enabled(self, unit_env):
        account_service = await unit_env.get(AccountService)
        endorsement_repo = await unit_env.get(EndorsementRequestRepository)
        accounts = await unit_env.get(AccountRepository)
        service = EndorsementService(
            endorsement_repository=endorsement_repo,
            account_service=account_service,
            settings=EndorsementSettings(enforce_quota=True, max_per_period=1),
        )
        await make_account(accounts, "requester", "new@example.org")
        await make_account(
            accounts,
            "endorser",
            "vet@example.org",
            TrustState.APPROVED,
            endorsements_given_this_period=1,
        )
        request = await service.create(AccountId("requester"), "vet@example.org")

        with pytest.raises(EndorsementQuotaExceededError):
            await service.resolve(
                request.id, AccountId("endorser"), EndorsementDecision.ACCEPT
            )

    @pytest.mark.asyncio
    async def test_rejected_endorser_cannot_accept(self, unit_env):
        """An endorser rejected after the request was made cannot vouch."""
        # Arrange
        service = await unit_env.get(EndorsementService)
        account_service = await unit_env.get(AccountService)
        repo = await unit_env.get(EndorsementRequestRepository)
        await _members(unit_env)
        request = await service.create(AccountId("requester"), "vet@example.org")
        await account_service.moderator_reject(AccountId("endorser"))

        # Act
        with pytest.raises(NotAuthorizedError):
            await service.resolve(
                request.id, AccountId("endorser"), EndorsementDecision.ACCEPT
            )

        # Assert
        requester = await account_service.get_by_id(AccountId("requester"))
        assert requester.trust_state == TrustState.PENDING_REVIEW
        stored = await repo.find_by_id(request.id)
        assert stored.status == EndorsementStatus.PENDING

    @pytest.mark.asyncio
    async def test_failed_elevation_reopens_request(self, unit_env, monkeypatch):
        """The request goes back to pending when the requester cannot be elevated."""
        service = await unit_env.get(EndorsementService)
        account_service = await unit_env.get(AccountService)
        repo = await unit_env.get(EndorsementRequestRepository)
        await _members(unit_env)
        request = await service.create(AccountId("requester"), "vet@example.org")

        async def fail_elevation(requester_id):
            raise TransientStoreError("store unavailable")

        monkeypatch.setattr(account_service, "endorsement_accepted", fail_elevation)

        with pytest.raises(TransientStoreError):
            await service.resolve(
                request.id, AccountId("endorser"), EndorsementDecision.ACCEPT
            )

        stored = await repo.find_by_id(request.id)
        assert stored.status == EndorsementStatus.PENDING
        assert stored.resolved_at is None
        endorser = await account_service.get_by_id(AccountId("endorser"))
        assert endorser.reputation_score == 0


class TestListing:
    @pytest.mark.asyncio
    async def test_incoming_and_outgoing(self, unit_env):
        service = await unit_env.get(EndorsementService)
        await _members(unit_env)
        request = await service.create(AccountId("requester"), "vet@example.org")

        incoming = await service.list_incoming(AccountId("endorser"))
        outgoing = await service.list_outgoing(AccountId("requester"))

        assert [r.id for r in incoming] == [request.id]
        assert [r.id for r in outgoing] == [request.id]
