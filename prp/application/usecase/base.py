"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

import logfire

from prp.config import Settings
from prp.domain.error import NotAuthorizedError, NotFoundError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def require_moderator(settings: Settings, user_id: str, resource: str, resource_id: str) -> None:
    """Ensure a principal is a configured moderator.

    Raises:
        NotAuthorizedError: If the principal is not a moderator
    """
    if not settings.is_moderator(user_id):
        logfire.warn("Moderator action denied", user_id=user_id, resource=resource)
        raise NotAuthorizedError(
            resource, resource_id, user_id, reason="moderator role required"
        )


def parse_id(value: str, resource: str) -> UUID:
    """Parse a UUID path parameter.

    Raises:
        NotFoundError: If the value is not a UUID, since no such record exists
    """
    try:
        return UUID(value)
    except ValueError as e:
        raise NotFoundError(resource, value) from e
