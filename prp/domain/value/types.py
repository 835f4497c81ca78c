"""Domain value objects for the Press Release Portal.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
import unicodedata
from enum import Enum

from pydantic import field_validator

from prp.domain.value.common import RootValueObject, ValueObject
from prp.domain.value.identifiers import AccountId


class TrustState(str, Enum):
    """Stored trust level of an account.

    Accounts start in PENDING_REVIEW and reach APPROVED through moderator
    approval, an accepted peer endorsement, or a redeemed invite code.
    """

    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class AccountStatus(str, Enum):
    """Status reported for a (possibly anonymous) principal.

    Superset of TrustState with an extra UNAUTHENTICATED value. It is never
    persisted.
    """

    UNAUTHENTICATED = "unauthenticated"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def from_trust_state(cls, state: TrustState) -> "AccountStatus":
        return cls(state.value)


class EndorsementStatus(str, Enum):
    """Status of an endorsement request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class EndorsementDecision(str, Enum):
    """Decision a target makes on an endorsement request."""

    ACCEPT = "accept"
    DECLINE = "decline"


class PressReleaseStatus(str, Enum):
    """Moderation status of a press release."""

    PENDING_MODERATION = "pending_moderation"
    APPROVED = "approved"
    REJECTED = "rejected"


class ModerationDecision(str, Enum):
    """Decision a moderator makes on a press release."""

    APPROVE = "approve"
    REJECT = "reject"


_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Email(RootValueObject[str]):
    """Email address, stored trimmed and lowercased."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalise and validate email format."""
        v = v.strip().lower()
        if len(v) > 320 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    @property
    def domain(self) -> str:
        """Part of the address after the '@'."""
        return self.root.rsplit("@", 1)[1]


class InviteToken(RootValueObject[str]):
    """Invite code such as 'PRP-4K7Q2Z'.

    Codes are case-insensitive; they are stored uppercased.
    """

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is uppercase alphanumeric groups joined by hyphens."""
        v = v.strip().upper()
        if len(v) < 1 or len(v) > 64:
            raise ValueError("Invite code must be 1-64 characters")
        if not re.match(r"^[A-Z0-9]+(?:-[A-Z0-9]+)*$", v):
            raise ValueError(
                "Invite code must be letters and digits, optionally hyphen separated"
            )
        return v


class SearchableField(str, Enum):
    """Press release fields the fuzzy matcher can read."""

    HEADLINE = "headline"
    LOCATION = "location"
    WHAT = "what"
    WHO = "who"
    WHEN = "when"
    WHERE = "where"
    WHY = "why"
    HOW = "how"


class SearchText(RootValueObject[str]):
    """Normalised text used for fuzzy comparison.

    NFC-normalised, casefolded, with runs of whitespace collapsed to one
    space.
    """

    @field_validator("root")
    @classmethod
    def normalise(cls, v: str) -> str:
        v = unicodedata.normalize("NFC", v).casefold()
        return " ".join(v.split())

    @property
    def words(self) -> list[str]:
        return self.root.split(" ") if self.root else []


class Principal(ValueObject):
    """Authenticated identity as reported by the identity provider."""

    id: AccountId
    email: Email


class AuthOutcome(ValueObject):
    """Result of a sign-up, sign-in or sign-out attempt."""

    success: bool
    principal: Principal | None = None
    error_message: str | None = None
