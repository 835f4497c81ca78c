"""Authentication use cases."""

from prp.application.usecase.auth.get_status import (
    GetStatusRequest,
    GetStatusResponse,
    GetStatusUseCase,
)
from prp.application.usecase.auth.login import (
    LoginRequest,
    LoginResponse,
    LoginUseCase,
)
from prp.application.usecase.auth.logout import (
    LogoutRequest,
    LogoutResponse,
    LogoutUseCase,
)
from prp.application.usecase.auth.reapply import (
    ReapplyRequest,
    ReapplyResponse,
    ReapplyUseCase,
)
from prp.application.usecase.auth.signup import (
    SignupRequest,
    SignupResponse,
    SignupUseCase,
)

__all__ = [
    "GetStatusRequest",
    "GetStatusResponse",
    "GetStatusUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutResponse",
    "LogoutUseCase",
    "ReapplyRequest",
    "ReapplyResponse",
    "ReapplyUseCase",
    "SignupRequest",
    "SignupResponse",
    "SignupUseCase",
]
