"""Unit tests for result parsing and interpretation."""

import json

import pytest

from hosting_deploy.core.exceptions import MalformedResultError, PreconditionError
from hosting_deploy.core.interpreter import (
    format_rfc1123,
    interpret_channel_deploy_result,
    parse_deploy_result,
)
from hosting_deploy.models.deployment import (
    ChannelSuccessResult,
    DeployMode,
    ErrorResult,
    ProductionSuccessResult,
)


class TestParseDeployResult:
    """Tests for parse_deploy_result."""

    def test_channel_success(self, channel_success_json: str):
        """Test a channel success keeps sites in insertion order."""
        result = parse_deploy_result(channel_success_json, DeployMode.CHANNEL)

        assert isinstance(result, ChannelSuccessResult)
        assert list(result.result) == ["siteA", "siteB"]
        assert result.result["siteB"].target == "blog"
        assert result.result["siteA"].expire_time == "2024-01-01T00:00:00.000Z"

    def test_channel_success_surrounding_whitespace(self, channel_success_json: str):
        """Test the raw text is trimmed before parsing."""
        result = parse_deploy_result(f"\n  {channel_success_json}  \n", DeployMode.CHANNEL)
        assert isinstance(result, ChannelSuccessResult)

    def test_production_success_keeps_opaque_values(self, production_success_json: str):
        """Test production results are delivered uninterpreted."""
        result = parse_deploy_result(production_success_json, DeployMode.PRODUCTION)

        assert isinstance(result, ProductionSuccessResult)
        assert result.result["functions"] == ["api", "worker"]
        assert result.result["firestore"] == {"rules": "firestore.rules"}

    @pytest.mark.parametrize("mode", [DeployMode.CHANNEL, DeployMode.PRODUCTION])
    def test_error_result_is_returned_not_raised(self, mode: DeployMode):
        """Test a reported failure parses into the error variant."""
        raw = json.dumps({"status": "error", "error": "Channel quota exceeded"})

        result = parse_deploy_result(raw, mode)

        assert isinstance(result, ErrorResult)
        assert result.status == "error"
        assert result.error == "Channel quota exceeded"

    def test_parse_is_idempotent(self, channel_success_json: str):
        """Test parsing the same text twice yields equal values."""
        first = parse_deploy_result(channel_success_json, DeployMode.CHANNEL)
        second = parse_deploy_result(channel_success_json, DeployMode.CHANNEL)
        assert first == second

        error_text = json.dumps({"status": "error", "error": "boom"})
        assert parse_deploy_result(error_text, DeployMode.PRODUCTION) == parse_deploy_result(
            error_text, DeployMode.PRODUCTION
        )

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "",
            "[1, 2, 3]",
            '{"result": {}}',
            '{"status": "pending"}',
            '{"status": "error"}',
            '{"status": "success", "result": {"site1": {"site": "site1"}}}',
        ],
    )
    def test_malformed_output_raises(self, raw: str):
        """Test malformed output is never coerced into a result."""
        with pytest.raises(MalformedResultError):
            parse_deploy_result(raw, DeployMode.CHANNEL)

    def test_malformed_error_keeps_raw_text(self):
        """Test the offending text travels with the error."""
        with pytest.raises(MalformedResultError) as exc_info:
            parse_deploy_result("not json", DeployMode.PRODUCTION)

        assert exc_info.value.raw_text == "not json"
        assert "not valid JSON" in exc_info.value.message


class TestInterpretChannelDeployResult:
    """Tests for interpret_channel_deploy_result."""

    def test_first_entry_derivation(self, channel_success_json: str):
        """Test expiry comes from the first site and URLs keep order."""
        result = parse_deploy_result(channel_success_json, DeployMode.CHANNEL)

        interpreted = interpret_channel_deploy_result(result)

        assert interpreted.expire_time == "2024-01-01T00:00:00.000Z"
        assert interpreted.expire_time_formatted == "Mon, 01 Jan 2024 00:00:00 GMT"
        assert interpreted.urls == ["https://a", "https://b"]

    def test_empty_result_raises_precondition_error(self):
        """Test zero sites is a contract violation, not an empty result."""
        result = ChannelSuccessResult(result={})

        with pytest.raises(PreconditionError):
            interpret_channel_deploy_result(result)

    def test_invalid_expire_time(self):
        """Test an unparseable expiry is reported as malformed output."""
        result = ChannelSuccessResult.model_validate(
            {
                "status": "success",
                "result": {"s": {"site": "s", "url": "https://s", "expireTime": "soon"}},
            }
        )

        with pytest.raises(MalformedResultError):
            interpret_channel_deploy_result(result)


class TestFormatRfc1123:
    """Tests for RFC 1123 rendering."""

    def test_utc_timestamp(self):
        assert format_rfc1123("2020-01-01T00:00:00.000Z") == "Wed, 01 Jan 2020 00:00:00 GMT"

    def test_offset_is_converted_to_gmt(self):
        assert format_rfc1123("2024-06-01T14:00:00+02:00") == "Sat, 01 Jun 2024 12:00:00 GMT"

    def test_nanosecond_fraction(self):
        """Test the nine fractional digits Google APIs emit are accepted."""
        assert format_rfc1123("2024-01-01T00:00:00.123456789Z") == "Mon, 01 Jan 2024 00:00:00 GMT"

    def test_short_fraction(self):
        assert format_rfc1123("2024-06-01T12:00:00.5Z") == "Sat, 01 Jun 2024 12:00:00 GMT"
