"""Unit tests for value objects."""

import pytest
from pydantic import ValidationError

from prp.domain.value import AccountStatus, Email, SearchText, TrustState


class TestEmail:
    """Tests for Email."""

    def test_normalised(self):
        email = Email("  Jane.Doe@Example.ORG ")

        assert email.root == "jane.doe@example.org"
        assert email.domain == "example.org"

    @pytest.mark.parametrize("value", ["", "no-at-sign", "a@b", "a b@example.org"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValidationError):
            Email(value)


class TestSearchText:
    """Tests for SearchText."""

    def test_casefolds_and_collapses_whitespace(self):
        assert SearchText("  Straße \n  Berlin ").root == "strasse berlin"

    def test_nfc_normalises(self):
        decomposed = "Café"

        assert SearchText(decomposed).root == "café"

    def test_words(self):
        assert SearchText("one  two").words == ["one", "two"]
        assert SearchText("   ").words == []


class TestAccountStatus:
    @pytest.mark.parametrize("state", list(TrustState))
    def test_every_trust_state_maps(self, state):
        assert AccountStatus.from_trust_state(state).value == state.value
