"""Encoders turning raw file bytes into text.

Each supported encoding name maps to a function ``bytes -> str``.
"""

import base64
from typing import Callable, Dict


def _encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def _encode_hex(data: bytes) -> str:
    return data.hex()


def _encode_latin1(data: bytes) -> str:
    return data.decode('latin-1')


def _encode_ascii(data: bytes) -> str:
    # High bit is cleared so every byte maps to a 7-bit character
    return bytes(byte & 0x7F for byte in data).decode('ascii')


def _encode_utf8(data: bytes) -> str:
    return data.decode('utf-8', errors='replace')


def _encode_utf16le(data: bytes) -> str:
    # A trailing odd byte cannot form a code unit
    if len(data) % 2:
        data = data[:-1]
    return data.decode('utf-16-le', errors='replace')


_ENCODERS: Dict[str, Callable[[bytes], str]] = {
    'base64': _encode_base64,
    'hex': _encode_hex,
    'binary': _encode_latin1,
    'latin1': _encode_latin1,
    'ascii': _encode_ascii,
    'utf8': _encode_utf8,
    'utf-8': _encode_utf8,
    'ucs2': _encode_utf16le,
    'ucs-2': _encode_utf16le,
    'utf16le': _encode_utf16le,
    'utf-16le': _encode_utf16le,
}


def encode_content(data: bytes, encoding: str = 'base64') -> str:
    """Encode file content as text.

    Args:
        data: Raw file bytes
        encoding: One of the names in ``readdirtree.config.ENCODINGS``

    Returns:
        Text representation of the content

    Raises:
        ValueError: If the encoding is not supported
    """
    try:
        encoder = _ENCODERS[encoding]
    except KeyError:
        raise ValueError(f"Unsupported encoding: {encoding!r}") from None
    return encoder(data)
