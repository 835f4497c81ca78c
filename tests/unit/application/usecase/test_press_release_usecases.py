"""Unit tests for the press release use cases."""

from uuid import UUID

import pytest
import pytest_asyncio

from prp.application.usecase.press_release import (
    DeletePressReleaseRequest,
    DeletePressReleaseUseCase,
    EditPressReleaseRequest,
    EditPressReleaseUseCase,
    GetPressReleaseRequest,
    GetPressReleaseUseCase,
    ListMyPressReleasesRequest,
    ListMyPressReleasesUseCase,
    ListPressReleasesRequest,
    ListPressReleasesUseCase,
    PressReleaseFields,
    SubmitPressReleaseRequest,
    SubmitPressReleaseUseCase,
)
from prp.domain.error import IncompleteSubmissionError, NotFoundError
from prp.domain.repository import AccountRepository
from prp.domain.service import PressReleaseService
from prp.domain.value import (
    ModerationDecision,
    PressReleaseId,
    PressReleaseStatus,
    TrustState,
)
from tests.conftest import make_account, press_release_fields
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _submit(unit_env, owner: str = "owner", **fields: str):
    use_case = await unit_env.get(SubmitPressReleaseUseCase)
    return await use_case.execute(
        SubmitPressReleaseRequest(
            user_id=owner, fields=PressReleaseFields(**press_release_fields(**fields))
        )
    )


async def _approve(unit_env, item) -> None:
    service = await unit_env.get(PressReleaseService)
    await service.moderate(PressReleaseId(UUID(item.id)), ModerationDecision.APPROVE)


@pytest_asyncio.fixture
async def owner(unit_env):
    repo = await unit_env.get(AccountRepository)
    return await make_account(repo, "owner", "owner@example.org", TrustState.APPROVED)


class TestSubmitPressRelease:
    """Tests for SubmitPressReleaseUseCase."""

    @pytest.mark.asyncio
    async def test_submit(self, unit_env, owner):
        item = await _submit(unit_env)

        assert item.status == PressReleaseStatus.PENDING_MODERATION
        assert item.owner_id == "owner"
        assert item.distance is None

    @pytest.mark.asyncio
    async def test_missing_field(self, unit_env, owner):
        use_case = await unit_env.get(SubmitPressReleaseUseCase)
        fields = press_release_fields()
        del fields["website"]

        with pytest.raises(IncompleteSubmissionError) as exc_info:
            await use_case.execute(
                SubmitPressReleaseRequest(user_id="owner", fields=PressReleaseFields(**fields))
            )

        assert exc_info.value.field == "website"


class TestEditAndDelete:
    """Tests for editing and deleting press releases."""

    @pytest.mark.asyncio
    async def test_edit_changes_only_given_fields(self, unit_env, owner):
        item = await _submit(unit_env)
        use_case = await unit_env.get(EditPressReleaseUseCase)

        edited = await use_case.execute(
            EditPressReleaseRequest(
                user_id="owner",
                press_release_id=item.id,
                fields=PressReleaseFields(headline="New headline"),
            )
        )

        assert edited.headline == "New headline"
        assert edited.what == item.what

    @pytest.mark.asyncio
    async def test_delete(self, unit_env, owner):
        item = await _submit(unit_env)
        delete = await unit_env.get(DeletePressReleaseUseCase)
        get = await unit_env.get(GetPressReleaseUseCase)

        response = await delete.execute(
            DeletePressReleaseRequest(user_id="owner", press_release_id=item.id)
        )

        assert response.success is True
        with pytest.raises(NotFoundError):
            await get.execute(
                GetPressReleaseRequest(press_release_id=item.id, user_id="owner")
            )

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, unit_env):
        get = await unit_env.get(GetPressReleaseUseCase)

        with pytest.raises(NotFoundError):
            await get.execute(GetPressReleaseRequest(press_release_id="not-a-uuid"))


class TestListPressReleases:
    """Tests for the public and owner listings."""

    @pytest.mark.asyncio
    async def test_public_list_hides_pending(self, unit_env, owner):
        """Only approved press releases should reach the public feed."""
        pending = await _submit(unit_env, headline="Pending story")
        live = await _submit(unit_env, headline="Live story")
        await _approve(unit_env, live)
        use_case = await unit_env.get(ListPressReleasesUseCase)

        response = await use_case.execute(ListPressReleasesRequest())

        ids = [item.id for item in response.items]
        assert ids == [live.id]
        assert pending.id not in ids

    @pytest.mark.asyncio
    async def test_public_search_is_fuzzy(self, unit_env, owner):
        """A search should find near spellings, exact match first."""
        nairobi = await _submit(unit_env, headline="Festival in Nairobi", location="Nairobi")
        typo = await _submit(unit_env, headline="Festival in Nairob", location="Nairob")
        other = await _submit(
            unit_env, headline="Harbour expansion", location="Mombasa", who="Port authority"
        )
        for item in (nairobi, typo, other):
            await _approve(unit_env, item)
        use_case = await unit_env.get(ListPressReleasesUseCase)

        response = await use_case.execute(ListPressReleasesRequest(q="nairobi"))

        ids = [item.id for item in response.items]
        assert set(ids) == {nairobi.id, typo.id}
        assert ids[0] == nairobi.id
        assert response.items[0].distance == 0.0

    @pytest.mark.asyncio
    async def test_own_list_includes_pending(self, unit_env, owner):
        pending = await _submit(unit_env)
        use_case = await unit_env.get(ListMyPressReleasesUseCase)

        response = await use_case.execute(ListMyPressReleasesRequest(user_id="owner"))

        assert [item.id for item in response.items] == [pending.id]
        assert response.items[0].status == PressReleaseStatus.PENDING_MODERATION
