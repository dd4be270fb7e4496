"""Data URL utilities.

Signature pads hand their content over as ``data:image/png;base64,...``
strings; this module turns them back into raw bytes.
"""

import base64
import binascii
from urllib.parse import unquote_to_bytes


def decode_data_url(data_url: str) -> bytes:
    """
    Decode the payload of a data URL.

    Args:
        data_url (str): A ``data:`` URL, base64 or percent encoded.

    Returns:
        bytes: The decoded payload.

    Raises:
        ValueError: If the string is not a data URL or its payload is malformed.
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")

    header, payload = data_url[len("data:") :].split(",", 1)
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Malformed base64 payload: {e}") from e
    return unquote_to_bytes(payload)
