"""In-memory invite code repository for testing."""

from datetime import datetime
from typing import Optional

from prp.domain.model import InviteCode
from prp.domain.repository import InviteCodeRepository
from prp.domain.value import AccountId, InviteToken


class InMemoryInviteCodeRepository(InviteCodeRepository):
    """In-memory implementation of InviteCodeRepository for testing.

    Conditional updates run without awaiting between the check and the
    write, so they are atomic with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._codes: dict[str, InviteCode] = {}

    async def find_by_code(self, code: InviteToken) -> Optional[InviteCode]:
        """Find an invite code."""
        return self._codes.get(code.root)

    async def add(self, invite_code: InviteCode) -> Optional[InviteCode]:
        """Insert an invite code, or return None if the code is taken."""
        if invite_code.code.root in self._codes:
            return None
        self._codes[invite_code.code.root] = invite_code
        return invite_code

    async def try_consume_use(
        self, code: InviteToken, now: datetime
    ) -> Optional[InviteCode]:
        """Consume one use if the code is still usable."""
        invite_code = self._codes.get(code.root)
        if not invite_code or not invite_code.is_usable(now):
            return None

        uses = invite_code.current_uses + 1
        updated = invite_code.model_copy(
            update={"current_uses": uses, "active": uses < invite_code.max_uses}
        )
        self._codes[code.root] = updated
        return updated

    async def release_use(self, code: InviteToken) -> Optional[InviteCode]:
        """Give back one consumed use."""
        invite_code = self._codes.get(code.root)
        if not invite_code or invite_code.current_uses == 0:
            return None

        updated = invite_code.model_copy(
            update={"current_uses": invite_code.current_uses - 1, "active": True}
        )
        self._codes[code.root] = updated
        return updated

    async def find_by_issuer(
        self, issued_by: AccountId, limit: int = 50, offset: int = 0
    ) -> list[InviteCode]:
        """List codes issued by an account, newest first."""
        codes = [c for c in self._codes.values() if c.issued_by == issued_by]
        codes.sort(key=lambda c: c.created_at, reverse=True)
        return codes[offset : offset + limit]
