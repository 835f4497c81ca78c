"""Press release use cases."""

from prp.application.usecase.press_release.delete_press_release import (
    DeletePressReleaseRequest,
    DeletePressReleaseResponse,
    DeletePressReleaseUseCase,
)
from prp.application.usecase.press_release.edit_press_release import (
    EditPressReleaseRequest,
    EditPressReleaseUseCase,
)
from prp.application.usecase.press_release.get_press_release import (
    GetPressReleaseRequest,
    GetPressReleaseUseCase,
)
from prp.application.usecase.press_release.item import (
    PressReleaseFields,
    PressReleaseItem,
    PressReleaseListResponse,
)
from prp.application.usecase.press_release.list_my_press_releases import (
    ListMyPressReleasesRequest,
    ListMyPressReleasesUseCase,
)
from prp.application.usecase.press_release.list_press_releases import (
    ListPressReleasesRequest,
    ListPressReleasesUseCase,
)
from prp.application.usecase.press_release.submit_press_release import (
    SubmitPressReleaseRequest,
    SubmitPressReleaseUseCase,
)

__all__ = [
    "DeletePressReleaseRequest",
    "DeletePressReleaseResponse",
    "DeletePressReleaseUseCase",
    "EditPressReleaseRequest",
    "EditPressReleaseUseCase",
    "GetPressReleaseRequest",
    "GetPressReleaseUseCase",
    "ListMyPressReleasesRequest",
    "ListMyPressReleasesUseCase",
    "ListPressReleasesRequest",
    "ListPressReleasesUseCase",
    "PressReleaseFields",
    "PressReleaseItem",
    "PressReleaseListResponse",
    "SubmitPressReleaseRequest",
    "SubmitPressReleaseUseCase",
]
