"""Moderation use cases."""

from prp.application.usecase.moderation.get_review_queue import (
    GetReviewQueueRequest,
    GetReviewQueueResponse,
    GetReviewQueueUseCase,
    PendingAccountItem,
)
from prp.application.usecase.moderation.moderate_account import (
    ModerateAccountRequest,
    ModerateAccountResponse,
    ModerateAccountUseCase,
)
from prp.application.usecase.moderation.moderate_press_release import (
    ModeratePressReleaseRequest,
    ModeratePressReleaseUseCase,
)

__all__ = [
    "GetReviewQueueRequest",
    "GetReviewQueueResponse",
    "GetReviewQueueUseCase",
    "ModerateAccountRequest",
    "ModerateAccountResponse",
    "ModerateAccountUseCase",
    "ModeratePressReleaseRequest",
    "ModeratePressReleaseUseCase",
    "PendingAccountItem",
]
