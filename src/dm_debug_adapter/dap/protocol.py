"""DAP envelope decoding and message framing.

DAP uses HTTP-style headers for message framing:
    Content-Length: <length>\r\n
    \r\n
    <JSON payload>

The transport deals in complete JSON payloads; everything here past the
framing helpers works on one payload at a time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from dm_debug_adapter.dap.messages import DAPRequest
from dm_debug_adapter.dap.messages import ProtocolMessage
from dm_debug_adapter.exceptions import DAPProtocolError

if TYPE_CHECKING:
    from dm_debug_adapter.dap.messages import DAPMessage

REQUEST_TYPE = "request"
CONTENT_LENGTH = "content-length"


def decode_envelope(text: str) -> ProtocolMessage:
    """Decode just the ``seq``/``type`` header of a message.

    Args:
        text: One complete JSON payload.

    Raises:
        DAPProtocolError: If the payload is not JSON or lacks the header.
    """
    try:
        return ProtocolMessage.model_validate_json(text)
    except ValidationError as e:
        raise DAPProtocolError(f"Invalid DAP message: {e}") from e


def decode_request(text: str) -> DAPRequest:
    """Fully decode a payload already known to be a request.

    Raises:
        DAPProtocolError: If the payload does not match the request shape.
    """
    try:
        return DAPRequest.model_validate_json(text)
    except ValidationError as e:
        raise DAPProtocolError(f"Invalid DAP request: {e}") from e


def encode_message(message: DAPMessage) -> str:
    """Encode an outgoing message, omitting unset optional fields."""
    return message.model_dump_json(by_alias=True, exclude_none=True)


def frame_message(payload: str) -> bytes:
    """Prefix a JSON payload with its Content-Length header."""
    content = payload.encode("utf-8")
    header = f"Content-Length: {len(content)}\r\n\r\n".encode("ascii")
    return header + content


def parse_content_length(header_data: bytes) -> int:
    """Parse Content-Length from header data.

    Args:
        header_data: The header bytes (without trailing CRLF CRLF).

    Returns:
        The content length value.

    Raises:
        DAPProtocolError: If Content-Length header is missing or invalid.
    """
    try:
        header_str = header_data.decode("ascii")
    except UnicodeDecodeError as e:
        raise DAPProtocolError("Invalid header encoding") from e

    for line in header_str.splitlines():
        name, sep, value = line.partition(":")
        if not sep or name.strip().lower() != CONTENT_LENGTH:
            continue
        try:
            length = int(value.strip())
        except ValueError as e:
            raise DAPProtocolError(f"Invalid Content-Length value: {line}") from e
        if length < 0:
            raise DAPProtocolError(f"Invalid Content-Length value: {line}")
        return length

    raise DAPProtocolError("Missing Content-Length header")
