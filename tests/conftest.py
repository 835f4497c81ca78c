"""Test configuration and shared builders."""

from datetime import timedelta

from prp.domain.model import Account
from prp.domain.model.common import utcnow
from prp.domain.repository import AccountRepository
from prp.domain.value import AccountId, Email, TrustState


async def make_account(
    account_repository: AccountRepository,
    account_id: str,
    email: str,
    trust_state: TrustState = TrustState.PENDING_REVIEW,
    **overrides,
) -> Account:
    """Store an account directly, bypassing signup.

    Args:
        account_repository: Repository to store into
        account_id: Principal ID
        email: Email address; the company domain is derived from it
        trust_state: Initial trust state
        **overrides: Any other Account field

    Returns:
        The stored account
    """
    now = utcnow()
    address = Email(email)
    fields = {
        "id": AccountId(account_id),
        "email": address,
        "trust_state": trust_state,
        "company_domain": address.domain,
        "period_reset_at": now + timedelta(days=30),
        "created_at": now,
        "updated_at": now,
        **overrides,
    }
    return await account_repository.add(Account(**fields))


def press_release_fields(**overrides: str) -> dict[str, str]:
    """A complete, valid set of press release content fields."""
    fields = {
        "headline": "Solar microgrid opens in Nairobi",
        "location": "Nairobi, Kenya",
        "date": "2026-03-14",
        "what": "A community solar microgrid begins supplying power.",
        "who": "Kibera Energy Cooperative and local partners.",
        "when": "The grid went live on the morning of March 14.",
        "where": "Kibera, Nairobi.",
        "why": "To give households reliable and affordable electricity.",
        "how": "Rooftop panels feed a shared battery bank.",
        "website": "https://example.org/microgrid",
    }
    fields.update(overrides)
    return fields
