"""Unit tests for transient store failure handling."""

import pytest
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    OperationalError,
    PendingRollbackError,
)

from prp.config import StoreSettings
from prp.domain.error import TransientStoreError
from prp.util.retry import (
    has_writes,
    is_transient,
    retry_transient,
    store_errors,
    store_write,
)


def _operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, ConnectionResetError("connection reset"))


class AbortedTransaction(Exception):
    """Driver error raised for statements in an aborted transaction."""

    sqlstate = "25P02"


class FakeSession:
    """Session stand-in recording rollbacks."""

    def __init__(self) -> None:
        self.info: dict = {}
        self.rollbacks = 0

    async def rollback(self) -> None:
        self.rollbacks += 1


class FlakyRepository:
    """Repository stand-in failing a fixed number of times."""

    def __init__(self, failures: int) -> None:
        self.session = FakeSession()
        self.store_settings = StoreSettings(
            retry_attempts=3, retry_wait_min_seconds=0, retry_wait_max_seconds=0
        )
        self.failures = failures
        self.calls = 0

    @retry_transient
    async def find(self, key: str) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            with store_errors("find"):
                raise _operational_error()
        return key


class TestStoreErrors:
    """Tests for translating database failures."""

    def test_operational_error_is_transient(self):
        with pytest.raises(TransientStoreError):
            with store_errors("save"):
                raise _operational_error()

    def test_integrity_error_passes_through(self):
        error = IntegrityError("INSERT", {}, Exception("duplicate key"))

        assert not is_transient(error)
        with pytest.raises(IntegrityError):
            with store_errors("save"):
                raise error

    def test_timeout_is_transient(self):
        with pytest.raises(TransientStoreError):
            with store_errors("save"):
                raise TimeoutError()

    def test_pending_rollback_is_transient(self):
        """A session left unusable by an earlier failure maps to a 503."""
        with pytest.raises(TransientStoreError):
            with store_errors("find"):
                raise PendingRollbackError("rollback first")

    def test_aborted_transaction_is_transient(self):
        error = DBAPIError("SELECT 1", {}, AbortedTransaction("aborted"))

        assert is_transient(error)

    def test_store_write_marks_session(self):
        session = FakeSession()
        assert not has_writes(session)

        with store_write(session, "insert"):
            pass

        assert has_writes(session)


class TestRetryTransient:
    """Tests for retrying idempotent reads."""

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self):
        """Each failed attempt rolls back before the next one."""
        repo = FlakyRepository(failures=2)

        assert await repo.find("key") == "key"
        assert repo.calls == 3
        assert repo.session.rollbacks == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        """The last TransientStoreError should reach the caller."""
        repo = FlakyRepository(failures=10)

        with pytest.raises(TransientStoreError):
            await repo.find("key")

        assert repo.calls == 3

    @pytest.mark.asyncio
    async def test_no_retry_once_transaction_has_writes(self):
        """A rollback would discard the request's writes, so the read runs once."""
        # Arrange
        repo = FlakyRepository(failures=1)
        with store_write(repo.session, "insert"):
            pass

        # Act
        with pytest.raises(TransientStoreError):
            await repo.find("key")

        # Assert
        assert repo.calls == 1
        assert repo.session.rollbacks == 0
