"""Tests for DAP envelope decoding and framing."""

from __future__ import annotations

import json

import pytest

from dm_debug_adapter.dap.messages import DAPEvent
from dm_debug_adapter.dap.messages import DAPResponse
from dm_debug_adapter.dap.protocol import decode_envelope
from dm_debug_adapter.dap.protocol import decode_request
from dm_debug_adapter.dap.protocol import encode_message
from dm_debug_adapter.dap.protocol import frame_message
from dm_debug_adapter.dap.protocol import parse_content_length
from dm_debug_adapter.exceptions import DAPProtocolError


class TestFrame:
    """Tests for message framing."""

    def test_frame_simple_message(self) -> None:
        """Test framing a simple payload."""
        framed = frame_message('{"seq":1}')

        assert framed == b'Content-Length: 9\r\n\r\n{"seq":1}'

    def test_frame_counts_utf8_bytes(self) -> None:
        """Test that Content-Length counts encoded bytes, not characters."""
        payload = '{"output":"héllo"}'
        framed = frame_message(payload)

        header_end = framed.index(b"\r\n\r\n")
        length = parse_content_length(framed[:header_end])
        assert length == len(payload.encode("utf-8"))
        assert length == len(payload) + 1


class TestParseContentLength:
    """Tests for Content-Length parsing."""

    def test_parse_valid_header(self) -> None:
        """Test parsing a valid Content-Length header."""
        assert parse_content_length(b"Content-Length: 119") == 119

    def test_parse_case_insensitive(self) -> None:
        """Test that header parsing is case-insensitive."""
        assert parse_content_length(b"content-length:42") == 42

    def test_parse_among_other_headers(self) -> None:
        """Test that other headers are skipped."""
        header = b"Content-Type: application/vscode-jsonrpc\r\nContent-Length: 7"
        assert parse_content_length(header) == 7

    def test_parse_missing_header(self) -> None:
        """Test that missing Content-Length raises error."""
        with pytest.raises(DAPProtocolError, match="Missing Content-Length"):
            parse_content_length(b"Content-Type: application/json")

    @pytest.mark.parametrize("value", [b"abc", b"-5"])
    def test_parse_invalid_value(self, value: bytes) -> None:
        """Test that invalid Content-Length values raise error."""
        with pytest.raises(DAPProtocolError, match="Invalid Content-Length"):
            parse_content_length(b"Content-Length: " + value)


class TestDecode:
    """Tests for envelope and request decoding."""

    def test_decode_envelope_ignores_rest(self) -> None:
        """Test that only seq and type are read from the envelope."""
        envelope = decode_envelope('{"seq": 4, "type": "event", "event": "output"}')
        assert envelope.seq == 4
        assert envelope.type == "event"

    def test_decode_envelope_invalid_json(self) -> None:
        """Test that invalid JSON raises error."""
        with pytest.raises(DAPProtocolError, match="Invalid DAP message"):
            decode_envelope("not json")

    def test_decode_envelope_non_object(self) -> None:
        """Test that non-object JSON raises error."""
        with pytest.raises(DAPProtocolError):
            decode_envelope("[1, 2, 3]")

    def test_decode_envelope_missing_type(self) -> None:
        """Test that the type discriminator is required."""
        with pytest.raises(DAPProtocolError):
            decode_envelope('{"seq": 1}')

    def test_decode_envelope_string_seq(self) -> None:
        """Test that a seq sent as a string is malformed, not coerced."""
        with pytest.raises(DAPProtocolError):
            decode_envelope('{"seq": "7", "type": "request"}')
        with pytest.raises(DAPProtocolError):
            decode_request('{"seq": "7", "type": "request", "command": "initialize"}')

    def test_decode_request_keeps_arguments_opaque(self) -> None:
        """Test that non-object arguments are left for the command to reject."""
        request = decode_request(
            '{"seq": 5, "type": "request", "command": "disconnect", "arguments": [1]}'
        )
        assert request.arguments == [1]

    def test_decode_request(self) -> None:
        """Test decoding a full request."""
        request = decode_request(
            '{"seq": 2, "type": "request", "command": "launch", "arguments": {"dmb": "a.dmb"}}'
        )
        assert request.seq == 2
        assert request.command == "launch"
        assert request.arguments == {"dmb": "a.dmb"}

    def test_decode_request_without_command(self) -> None:
        """Test that a request must name a command."""
        with pytest.raises(DAPProtocolError, match="Invalid DAP request"):
            decode_request('{"seq": 2, "type": "request"}')


class TestEncode:
    """Tests for outgoing message encoding."""

    def test_success_response_omits_message(self) -> None:
        """Test that a successful response carries no message field."""
        response = DAPResponse(seq=1, request_seq=5, command="launch", success=True)
        data = json.loads(encode_message(response))

        assert data == {
            "seq": 1,
            "type": "response",
            "request_seq": 5,
            "command": "launch",
            "success": True,
        }

    def test_failure_response_has_message(self) -> None:
        """Test that a failed response carries its message and no body."""
        response = DAPResponse(
            seq=2, request_seq=6, command="nope", success=False, message="unknown command `nope`"
        )
        data = json.loads(encode_message(response))

        assert data["message"] == "unknown command `nope`"
        assert "body" not in data

    def test_event_keeps_empty_body(self) -> None:
        """Test that an empty event body is sent as an object."""
        data = json.loads(encode_message(DAPEvent(seq=3, event="terminated", body={})))
        assert data == {"seq": 3, "type": "event", "event": "terminated", "body": {}}
