"""Tests for loggly_rsyslog.secretstore."""

import json
from unittest.mock import Mock

import pytest

from loggly_rsyslog.errors import MissingSecretError, SecretStoreError
from loggly_rsyslog.secretstore import (
    DataBagDirectoryLookup,
    MappingLookup,
    resolve_token,
)
from loggly_rsyslog.settings import TokenSettings


class TestResolveToken:
    """Test cases for resolve_token."""

    def test_token_from_default_databag(self, lookup):
        """Test the default loggly/token data bag item is used."""
        assert resolve_token(TokenSettings(), lookup) == "abc123"

    def test_alternative_databag_and_item(self):
        """Test a different bag and item name are looked up."""
        store = MappingLookup(
            {("credentials", "loggly_token"): {"id": "token", "token": "abc12345"}}
        )
        settings = TokenSettings(databag="credentials", databag_item="loggly_token")

        assert resolve_token(settings, store) == "abc12345"

    def test_missing_record_is_fatal(self):
        """Test a data bag miss raises MissingSecretError."""
        with pytest.raises(MissingSecretError) as exc_info:
            resolve_token(TokenSettings(), MappingLookup())

        assert "loggly" in str(exc_info.value)

    def test_record_without_token_is_fatal(self):
        """Test a record lacking the token field raises MissingSecretError."""
        store = MappingLookup({("loggly", "token"): {"id": "token"}})

        with pytest.raises(MissingSecretError):
            resolve_token(TokenSettings(), store)

    def test_literal_value_skips_store(self):
        """Test the attribute value is used and the store is never consulted."""
        store = Mock()
        settings = TokenSettings(from_databag=False, value="logglytoken1234")

        assert resolve_token(settings, store) == "logglytoken1234"
        store.lookup.assert_not_called()

    def test_empty_literal_value_is_fatal(self):
        """Test an empty literal token raises MissingSecretError."""
        with pytest.raises(MissingSecretError):
            resolve_token(TokenSettings(from_databag=False), MappingLookup())


class TestDataBagDirectoryLookup:
    """Test cases for DataBagDirectoryLookup."""

    def test_reads_item_json(self, tmp_path):
        """Test an item file is read as a record."""
        bag = tmp_path / "loggly"
        bag.mkdir()
        (bag / "token.json").write_text(json.dumps({"id": "token", "token": "abc123"}))

        record = DataBagDirectoryLookup(tmp_path).lookup("loggly", "token")

        assert record == {"id": "token", "token": "abc123"}

    def test_missing_item_returns_none(self, tmp_path):
        """Test a missing item file is reported as absent."""
        assert DataBagDirectoryLookup(tmp_path).lookup("loggly", "token") is None

    def test_invalid_json_raises(self, tmp_path):
        """Test unreadable JSON raises SecretStoreError."""
        bag = tmp_path / "loggly"
        bag.mkdir()
        (bag / "token.json").write_text("{not json")

        with pytest.raises(SecretStoreError):
            DataBagDirectoryLookup(tmp_path).lookup("loggly", "token")

    def test_non_object_json_raises(self, tmp_path):
        """Test a JSON array is rejected."""
        bag = tmp_path / "loggly"
        bag.mkdir()
        (bag / "token.json").write_text('["abc123"]')

        with pytest.raises(SecretStoreError):
            DataBagDirectoryLookup(tmp_path).lookup("loggly", "token")
