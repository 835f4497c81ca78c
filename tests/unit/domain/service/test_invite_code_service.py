"""Unit tests for InviteCodeService."""

import asyncio
import re
from datetime import timedelta

import pytest

from prp.domain.error import (
    CodeCollisionError,
    CodeExhaustedError,
    CodeExpiredError,
    CodeNotFoundError,
    ConflictError,
    DomainMismatchError,
    ValidationError,
)
from prp.domain.model import InviteCode
from prp.domain.model.common import utcnow
from prp.domain.repository import AccountRepository, InviteCodeRepository
from prp.domain.service import InviteCodeService
from prp.domain.service.invite_code_service import generate_code
from prp.domain.value import AccountId, InviteToken, TrustState
from tests.conftest import make_account
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _issuer(unit_env) -> AccountId:
    repo = await unit_env.get(AccountRepository)
    account = await make_account(
        repo, "issuer", "issuer@example.org", TrustState.APPROVED
    )
    return account.id


async def _store_code(unit_env, code: str, **fields) -> InviteCode:
    repo = await unit_env.get(InviteCodeRepository)
    return await repo.add(
        InviteCode(code=InviteToken(code), issued_by=AccountId("issuer"), **fields)
    )


class TestGenerateCode:
    def test_format(self):
        assert re.fullmatch(r"PRP-[A-Z0-9]{6}", generate_code("PRP", 6))
        assert re.fullmatch(r"MOD-[A-Z0-9]{8}", generate_code("MOD", 8))


class TestIssue:
    """Tests for issue."""

    @pytest.mark.asyncio
    async def test_issue_defaults(self, unit_env):
        """A fresh code has one use, no restriction and is active."""
        service = await unit_env.get(InviteCodeService)
        issuer = await _issuer(unit_env)

        code = await service.issue(issuer)

        assert code.code.root.startswith("PRP-")
        assert code.max_uses == 1
        assert code.current_uses == 0
        assert code.active is True
        assert code.invitee_domain is None

    @pytest.mark.asyncio
    async def test_issue_normalises_domain(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        issuer = await _issuer(unit_env)

        code = await service.issue(issuer, invitee_domain="@Example.ORG ")

        assert code.invitee_domain == "example.org"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_uses", [0, -1])
    async def test_issue_rejects_non_positive_max_uses(self, unit_env, max_uses):
        service = await unit_env.get(InviteCodeService)
        issuer = await _issuer(unit_env)

        with pytest.raises(ValidationError):
            await service.issue(issuer, max_uses=max_uses)

    @pytest.mark.asyncio
    async def test_issue_rejects_past_expiry(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        issuer = await _issuer(unit_env)

        with pytest.raises(ValidationError):
            await service.issue(issuer, expires_at=utcnow() - timedelta(minutes=1))

    @pytest.mark.asyncio
    async def test_issue_retries_collisions(self, unit_env, monkeypatch):
        """A colliding candidate is replaced by a fresh one."""
        service = await unit_env.get(InviteCodeService)
        issuer = await _issuer(unit_env)
        await _store_code(unit_env, "PRP-AAAAAA")

        candidates = iter(["PRP-AAAAAA", "PRP-BBBBBB"])
        monkeypatch.setattr(
            "prp.domain.service.invite_code_service.generate_code",
            lambda prefix, length: next(candidates),
        )

        code = await service.issue(issuer)

        assert code.code.root == "PRP-BBBBBB"

    @pytest.mark.asyncio
    async def test_issue_gives_up_after_attempts(self, unit_env, monkeypatch):
        service = await unit_env.get(InviteCodeService)
        issuer = await _issuer(unit_env)
        await _store_code(unit_env, "PRP-AAAAAA")

        monkeypatch.setattr(
            "prp.domain.service.invite_code_service.generate_code",
            lambda prefix, length: "PRP-AAAAAA",
        )

        with pytest.raises(CodeCollisionError):
            await service.issue(issuer)


class TestRedeem:
    """Tests for redeem."""

    @pytest.mark.asyncio
    async def test_redeem_elevates_and_consumes(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        codes = await unit_env.get(InviteCodeRepository)
        await _issuer(unit_env)
        await _store_code(unit_env, "PRP-ABC123", max_uses=2)
        await make_account(accounts, "uid-1", "new@example.org")

        result = await service.redeem(InviteToken("prp-abc123"), AccountId("uid-1"))

        assert result.elevated is True
        assert result.trust_state == TrustState.APPROVED
        assert result.remaining_uses == 1
        stored = await codes.find_by_code(InviteToken("PRP-ABC123"))
        assert stored.current_uses == 1
        assert stored.active is True

    @pytest.mark.asyncio
    async def test_last_use_deactivates_code(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        codes = await unit_env.get(InviteCodeRepository)
        await _issuer(unit_env)
        await _store_code(unit_env, "PRP-ABC123", max_uses=1)
        await make_account(accounts, "uid-1", "new@example.org")

        await service.redeem(InviteToken("PRP-ABC123"), AccountId("uid-1"))

        stored = await codes.find_by_code(InviteToken("PRP-ABC123"))
        assert stored.current_uses == 1
        assert stored.active is False

    @pytest.mark.asyncio
    async def test_unknown_code(self, unit_env):
        service = await unit_env.get(InviteCodeService)

        with pytest.raises(CodeNotFoundError):
            await service.redeem(InviteToken("PRP-NOPE00"), AccountId("uid-1"))

    @pytest.mark.asyncio
    async def test_expired_code(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        await _issuer(unit_env)
        await _store_code(
            unit_env, "PRP-OLD000", expires_at=utcnow() - timedelta(days=1)
        )
        await make_account(accounts, "uid-1", "new@example.org")

        with pytest.raises(CodeExpiredError):
            await service.redeem(InviteToken("PRP-OLD000"), AccountId("uid-1"))

    @pytest.mark.asyncio
    async def test_domain_restriction(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        await _issuer(unit_env)
        await _store_code(unit_env, "PRP-DOM000", invitee_domain="example.org")
        await make_account(accounts, "uid-1", "someone@elsewhere.com")

        with pytest.raises(DomainMismatchError):
            await service.redeem(InviteToken("PRP-DOM000"), AccountId("uid-1"))

    @pytest.mark.asyncio
    async def test_exhausted_code(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        await _issuer(unit_env)
        await _store_code(
            unit_env, "PRP-USED00", max_uses=1, current_uses=1, active=False
        )
        await make_account(accounts, "uid-1", "new@example.org")

        with pytest.raises(CodeExhaustedError):
            await service.redeem(InviteToken("PRP-USED00"), AccountId("uid-1"))

    @pytest.mark.asyncio
    async def test_approved_redeemer_consumes_nothing(self, unit_env):
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        codes = await unit_env.get(InviteCodeRepository)
        await _issuer(unit_env)
        await _store_code(unit_env, "PRP-ABC123")
        await make_account(accounts, "uid-1", "new@example.org", TrustState.APPROVED)

        result = await service.redeem(InviteToken("PRP-ABC123"), AccountId("uid-1"))

        assert result.elevated is False
        stored = await codes.find_by_code(InviteToken("PRP-ABC123"))
        assert stored.current_uses == 0

    @pytest.mark.asyncio
    async def test_concurrent_redemption_of_single_use_code(self, unit_env):
        """Two redeemers race for one use: exactly one wins."""
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        codes = await unit_env.get(InviteCodeRepository)
        await _issuer(unit_env)
        await _store_code(unit_env, "PRP-RACE00", max_uses=1)
        await make_account(accounts, "uid-1", "one@example.org")
        await make_account(accounts, "uid-2", "two@example.org")

        results = await asyncio.gather(
            service.redeem(InviteToken("PRP-RACE00"), AccountId("uid-1")),
            service.redeem(InviteToken("PRP-RACE00"), AccountId("uid-2")),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], ConflictError)

        stored = await codes.find_by_code(InviteToken("PRP-RACE00"))
        assert stored.current_uses == 1
        approved = [
            a
            for a in [
                await accounts.find_by_id(AccountId("uid-1")),
                await accounts.find_by_id(AccountId("uid-2")),
            ]
            if a.trust_state == TrustState.APPROVED
        ]
        assert len(approved) == 1

    @pytest.mark.asyncio
    async def test_failed_elevation_releases_use(self, unit_env, monkeypatch):
        """If the account write fails the consumed use is given back."""
        service = await unit_env.get(InviteCodeService)
        accounts = await unit_env.get(AccountRepository)
        codes = await unit_env.get(InviteCodeRepository)
        await _issuer(unit_env)
        await _store_code(unit_env, "PRP-ABC123")
        await make_account(accounts, "uid-1", "new@example.org")

        async def fail(*args, **kwargs):
            raise RuntimeError("store down")

        monkeypatch.setattr(service.account_service, "invite_redeemed", fail)

        with pytest.raises(RuntimeError):
            await service.redeem(InviteToken("PRP-ABC123"), AccountId("uid-1"))

        stored = await codes.find_by_code(InviteToken("PRP-ABC123"))
        assert stored.current_uses == 0
        assert stored.active is True
