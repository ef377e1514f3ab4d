"""
Unit tests for master key token generation.
"""

import base64
import datetime
import hashlib
import hmac
from unittest.mock import patch
from urllib.parse import quote_plus, unquote_plus

import pytest

from docdb_client import (
    generate_auth_token,
    build_signature_payload,
    decode_master_key,
    format_timestamp,
    KeyDecodeError
)


FIXED_NOW = datetime.datetime(2006, 1, 2, 15, 4, 5, tzinfo=datetime.timezone.utc)
FIXED_TIMESTAMP = "Mon, 02 Jan 2006 15:04:05 GMT"


class TestTokenGeneration:
    """Test authorization token generation."""

    @pytest.fixture
    def master_key(self):
        """Create a realistic 64-byte base64 master key."""
        return base64.b64encode(bytes(range(64))).decode('ascii')

    def test_format_timestamp(self):
        """Test RFC1123 formatting with the GMT zone."""
        assert format_timestamp(FIXED_NOW) == FIXED_TIMESTAMP

    def test_format_timestamp_naive_is_utc(self):
        """Test that naive datetimes are treated as UTC."""
        assert format_timestamp(FIXED_NOW.replace(tzinfo=None)) == FIXED_TIMESTAMP

    def test_format_timestamp_converts_to_utc(self):
        """Test that other zones are converted before formatting."""
        plus_two = datetime.timezone(datetime.timedelta(hours=2))
        moment = datetime.datetime(2006, 1, 2, 17, 4, 5, tzinfo=plus_two)

        assert format_timestamp(moment) == FIXED_TIMESTAMP

    def test_signature_payload_list_databases(self):
        """Test the exact payload for listing databases."""
        payload = build_signature_payload("GET", "", "dbs", FIXED_TIMESTAMP)

        assert payload == "get\ndbs\n\nmon, 02 jan 2006 15:04:05 gmt\n\n"

    def test_signature_payload_keeps_resource_case(self):
        """Test that only the resource link keeps its case."""
        payload = build_signature_payload("POST", "dbs/MyDb", "COLLS", FIXED_TIMESTAMP)

        assert payload == "post\ncolls\ndbs/MyDb\nmon, 02 jan 2006 15:04:05 gmt\n\n"

    def test_decode_master_key_round_trip(self, master_key):
        """Test that decoding then re-encoding reproduces the key."""
        raw = decode_master_key(master_key)

        assert len(raw) == 64
        assert base64.b64encode(raw).decode('ascii') == master_key

    @pytest.mark.parametrize("bad_key", ["not base64!!", "Zm9", "Zm9v$"])
    def test_decode_master_key_invalid(self, bad_key):
        """Test that invalid base64 keys are rejected."""
        with pytest.raises(KeyDecodeError):
            decode_master_key(bad_key)

    def test_generate_auth_token(self, master_key):
        """Test the token against an independently computed signature."""
        token, timestamp = generate_auth_token("GET", "dbs/db1", "colls", master_key, now=FIXED_NOW)

        assert timestamp == FIXED_TIMESTAMP

        payload = "get\ncolls\ndbs/db1\nmon, 02 jan 2006 15:04:05 gmt\n\n"
        expected_sig = base64.b64encode(
            hmac.new(bytes(range(64)), payload.encode('utf-8'), hashlib.sha256).digest()
        ).decode('ascii')
        assert token == quote_plus(f"type=master&ver=1.0&sig={expected_sig}", safe='')

    def test_generate_auth_token_is_escaped(self, master_key):
        """Test that the token is escaped as one query value."""
        token, _ = generate_auth_token("GET", "", "dbs", master_key, now=FIXED_NOW)

        assert token.startswith("type%3Dmaster%26ver%3D1.0%26sig%3D")
        assert "&" not in token
        assert "=" not in token
        assert "/" not in token
        assert "+" not in token
        assert unquote_plus(token).startswith("type=master&ver=1.0&sig=")

    def test_generate_auth_token_deterministic(self, master_key):
        """Test that a fixed clock gives the same token every time."""
        first = generate_auth_token("GET", "", "dbs", master_key, now=FIXED_NOW)
        second = generate_auth_token("GET", "", "dbs", master_key, now=FIXED_NOW)

        assert first == second

    def test_generate_auth_token_depends_on_inputs(self, master_key):
        """Test that verb, resource and key all change the signature."""
        base, _ = generate_auth_token("GET", "dbs/db1", "dbs", master_key, now=FIXED_NOW)
        other_verb, _ = generate_auth_token("POST", "dbs/db1", "dbs", master_key, now=FIXED_NOW)
        other_resource, _ = generate_auth_token("GET", "dbs/db2", "dbs", master_key, now=FIXED_NOW)
        other_key, _ = generate_auth_token("GET", "dbs/db1", "dbs", "Zm9v", now=FIXED_NOW)

        assert len({base, other_verb, other_resource, other_key}) == 4

    def test_generate_auth_token_uses_current_time(self, master_key):
        """Test that the clock is read once and its value returned."""
        with patch('docdb_client.auth._utcnow', return_value=FIXED_NOW) as clock:
            token, timestamp = generate_auth_token("GET", "", "dbs", master_key)

        clock.assert_called_once()
        assert timestamp == FIXED_TIMESTAMP
        assert (token, timestamp) == generate_auth_token("GET", "", "dbs", master_key, now=FIXED_NOW)

    def test_generate_auth_token_invalid_key(self):
        """Test that an invalid key fails before signing."""
        with pytest.raises(KeyDecodeError):
            generate_auth_token("GET", "", "dbs", "not base64!!", now=FIXED_NOW)
