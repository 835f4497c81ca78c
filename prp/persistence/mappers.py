"""Mappers for converting between database rows and domain models.

Since the domain models are immutable Pydantic models, rows are mapped by
hand instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from prp.domain.model import Account, EndorsementRequest, InviteCode, PressRelease
from prp.domain.value import (
    AccountId,
    Email,
    EndorsementRequestId,
    EndorsementStatus,
    InviteToken,
    PressReleaseId,
    PressReleaseStatus,
    TrustState,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model."""
    return Account(
        id=AccountId(row["id"]),
        email=Email(row["email"]),
        trust_state=TrustState(row["trust_state"]),
        reputation_score=row["reputation_score"],
        endorsements_given_this_period=row["endorsements_given_this_period"],
        period_reset_at=row["period_reset_at"],
        company_domain=row["company_domain"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Enums are stored by value and the email as its plain string.
    """
    return account.model_dump() | {
        "email": account.email.root,
        "trust_state": account.trust_state.value,
    }


def row_to_invite_code(row: Dict[str, Any]) -> InviteCode:
    """Convert database row to InviteCode domain model."""
    return InviteCode(
        code=InviteToken(row["code"]),
        issued_by=AccountId(row["issued_by"]),
        max_uses=row["max_uses"],
        current_uses=row["current_uses"],
        invitee_domain=row.get("invitee_domain"),
        expires_at=row.get("expires_at"),
        active=row["active"],
        created_at=row["created_at"],
    )


def invite_code_to_dict(invite_code: InviteCode) -> Dict[str, Any]:
    """Convert InviteCode domain model to database dict."""
    return invite_code.model_dump() | {"code": invite_code.code.root}


def row_to_endorsement_request(row: Dict[str, Any]) -> EndorsementRequest:
    """Convert database row to EndorsementRequest domain model."""
    return EndorsementRequest(
        id=EndorsementRequestId(_uuid(row["id"])),
        requester_id=AccountId(row["requester_id"]),
        target_id=AccountId(row["target_id"]),
        status=EndorsementStatus(row["status"]),
        message=row["message"],
        created_at=row["created_at"],
        resolved_at=row.get("resolved_at"),
    )


def endorsement_request_to_dict(request: EndorsementRequest) -> Dict[str, Any]:
    """Convert EndorsementRequest domain model to database dict."""
    return request.model_dump() | {"status": request.status.value}


def row_to_press_release(row: Dict[str, Any]) -> PressRelease:
    """Convert database row to PressRelease domain model."""
    return PressRelease(
        id=PressReleaseId(_uuid(row["id"])),
        owner_id=AccountId(row["owner_id"]),
        status=PressReleaseStatus(row["status"]),
        headline=row["headline"],
        location=row["location"],
        date=row["date"],
        what=row["what"],
        who=row["who"],
        when=row["when"],
        where=row["where"],
        why=row["why"],
        how=row["how"],
        website=row["website"],
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def press_release_to_dict(press_release: PressRelease) -> Dict[str, Any]:
    """Convert PressRelease domain model to database dict."""
    return press_release.model_dump() | {"status": press_release.status.value}
