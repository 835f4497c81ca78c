"""Invite code use cases."""

from prp.application.usecase.invite.issue_invite_code import (
    IssueInviteCodeRequest,
    IssueInviteCodeResponse,
    IssueInviteCodeUseCase,
)
from prp.application.usecase.invite.list_invite_codes import (
    InviteCodeItem,
    ListInviteCodesRequest,
    ListInviteCodesResponse,
    ListInviteCodesUseCase,
)
from prp.application.usecase.invite.redeem_invite_code import (
    RedeemInviteCodeRequest,
    RedeemInviteCodeResponse,
    RedeemInviteCodeUseCase,
)

__all__ = [
    "InviteCodeItem",
    "IssueInviteCodeRequest",
    "IssueInviteCodeResponse",
    "IssueInviteCodeUseCase",
    "ListInviteCodesRequest",
    "ListInviteCodesResponse",
    "ListInviteCodesUseCase",
    "RedeemInviteCodeRequest",
    "RedeemInviteCodeResponse",
    "RedeemInviteCodeUseCase",
]
