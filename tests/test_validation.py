"""Tests for resolver payload validation."""

import pytest

from automate_dns.resolvers.validation import (
    MISSING_FIELDS_MESSAGE,
    PayloadMode,
    is_valid_ipv4,
    validate_resolver_payload,
)


@pytest.mark.parametrize("value", ["256.1.1.1", "1.2.3", "1.2.3.4.5", "abc", "01.2.3.4", "1.2.3.-4", " "])
def test_invalid_ipv4(value):
    assert not is_valid_ipv4(value)


@pytest.mark.parametrize("value", ["0.0.0.0", "255.255.255.255", "192.168.1.1", "10.0.0.254"])
def test_valid_ipv4(value):
    assert is_valid_ipv4(value)


def test_create_requires_provider_and_hostname():
    result = validate_resolver_payload({}, PayloadMode.CREATE)
    assert result.errors == ["provider is required", "hostname is required"]
    assert not result.ok


def test_create_normalizes_fields():
    result = validate_resolver_payload(
        {"provider": " cf ", "hostname": "a.example.com\n", "alias": " web ", "ipv4": " 1.2.3.4 "},
        "create",
    )
    assert result.ok
    assert result.fields == {
        "provider": "cf",
        "hostname": "a.example.com",
        "alias": "web",
        "ipv4": "1.2.3.4",
    }


def test_blank_and_non_string_values():
    result = validate_resolver_payload(
        {"provider": "   ", "hostname": 42, "alias": None, "ipv4": 17}, PayloadMode.CREATE
    )
    assert result.errors == ["provider cannot be empty", "hostname cannot be empty"]
    # Non-string alias / ipv4 collapse to empty strings
    assert result.fields == {"alias": "", "ipv4": ""}


def test_empty_ipv4_means_unset():
    result = validate_resolver_payload({"ipv4": ""}, PayloadMode.UPDATE)
    assert result.ok
    assert result.fields == {"ipv4": ""}


def test_all_errors_reported_together():
    result = validate_resolver_payload(
        {"provider": "", "hostname": "", "ipv4": "999.0.0.1"}, PayloadMode.CREATE
    )
    assert result.errors == [
        "provider cannot be empty",
        "hostname cannot be empty",
        "ipv4 must be a valid IPv4 address",
    ]


def test_update_accepts_any_subset():
    result = validate_resolver_payload({"alias": ""}, PayloadMode.UPDATE)
    assert result.ok
    assert result.fields == {"alias": ""}


def test_update_requires_a_recognized_field():
    result = validate_resolver_payload({"colour": "blue", "id": 3}, PayloadMode.UPDATE)
    assert result.errors == [MISSING_FIELDS_MESSAGE]
    assert result.fields == {}


def test_update_with_only_invalid_field_reports_both():
    result = validate_resolver_payload({"ipv4": "abc"}, PayloadMode.UPDATE)
    assert result.errors == ["ipv4 must be a valid IPv4 address", MISSING_FIELDS_MESSAGE]


def test_unknown_fields_are_dropped():
    result = validate_resolver_payload(
        {"provider": "cf", "hostname": "h", "isDeleted": True, "ctime": "x"}, PayloadMode.CREATE
    )
    assert set(result.fields) == {"provider", "hostname"}
