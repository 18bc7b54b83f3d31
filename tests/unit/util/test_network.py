"""Unit tests for client IP extraction."""

from narravo.util.network import extract_client_ip, is_valid_ip


class TestExtractClientIp:
    """Tests for extract_client_ip."""

    def test_first_forwarded_address_wins(self):
        headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1, 10.0.0.2"}

        assert extract_client_ip(headers) == "203.0.113.7"

    def test_headers_are_case_insensitive(self):
        assert extract_client_ip({"X-REAL-IP": "198.51.100.4"}) == "198.51.100.4"

    def test_invalid_values_fall_through_to_next_header(self):
        headers = {"x-forwarded-for": "not-an-ip", "cf-connecting-ip": "2001:db8::1"}

        assert extract_client_ip(headers) == "2001:db8::1"

    def test_no_usable_header_returns_none(self):
        assert extract_client_ip({"user-agent": "curl"}) is None
        assert extract_client_ip({}) is None
        assert extract_client_ip(None) is None


def test_is_valid_ip():
    assert is_valid_ip("127.0.0.1")
    assert is_valid_ip("::1")
    assert not is_valid_ip("256.0.0.1")
    assert not is_valid_ip("localhost")
