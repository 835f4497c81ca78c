"""Endorsement use cases."""

from prp.application.usecase.endorsement.item import EndorsementRequestItem
from prp.application.usecase.endorsement.list_endorsements import (
    ListEndorsementsRequest,
    ListEndorsementsResponse,
    ListEndorsementsUseCase,
)
from prp.application.usecase.endorsement.request_endorsement import (
    RequestEndorsementRequest,
    RequestEndorsementUseCase,
)
from prp.application.usecase.endorsement.resolve_endorsement import (
    ResolveEndorsementRequest,
    ResolveEndorsementUseCase,
)

__all__ = [
    "EndorsementRequestItem",
    "ListEndorsementsRequest",
    "ListEndorsementsResponse",
    "ListEndorsementsUseCase",
    "RequestEndorsementRequest",
    "RequestEndorsementUseCase",
    "ResolveEndorsementRequest",
    "ResolveEndorsementUseCase",
]
