"""
PlantUML text encoding.

PlantUML packs diagram source into URL path segments by compressing it and
writing the result in base64 over its own alphabet::

    0-9 A-Z a-z - _

which is the standard base64 alphabet (``A-Z a-z 0-9 + /``) in a different
order and without padding. Decoding remaps each symbol by index, restores the
padding, base64-decodes and inflates the zlib stream.
"""

import base64
import binascii
import zlib

from .errors import Base64DecodeFailed, DecompressionFailed, InvalidEncoding

PLANTUML_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

_DECODE_INDEX = {ch: i for i, ch in enumerate(PLANTUML_ALPHABET)}
_TO_PLANTUML = str.maketrans(BASE64_ALPHABET, PLANTUML_ALPHABET)

# largest diagram source a token may inflate to
MAX_SOURCE_BYTES = 4 * 1024 * 1024


def to_base64_alphabet(encoded: str) -> str:
    """Remap a PlantUML-alphabet string to the standard base64 alphabet.

    Raises:
        InvalidEncoding: on the first character outside the alphabet.
    """
    chars = []
    for position, ch in enumerate(encoded):
        index = _DECODE_INDEX.get(ch)
        if index is None:
            raise InvalidEncoding(ch, position)
        chars.append(BASE64_ALPHABET[index])
    return "".join(chars)


def decode(encoded: str, max_size: int = MAX_SOURCE_BYTES) -> str:
    """
    Decode a PlantUML-encoded token back to diagram source.

    Args:
        encoded: Token over ``0-9A-Za-z-_``
        max_size: Largest accepted decompressed size in bytes

    Returns:
        The original diagram source text

    Raises:
        InvalidEncoding: token contains a character outside the alphabet
        Base64DecodeFailed: remapped token is not valid base64
        DecompressionFailed: payload is not a zlib stream of UTF-8 text, or
            inflates past ``max_size``
    """
    standard = to_base64_alphabet(encoded)
    standard += "=" * (-len(standard) % 4)

    try:
        compressed = base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64DecodeFailed(e) from e

    inflater = zlib.decompressobj()
    try:
        raw = inflater.decompress(compressed, max_size + 1)
    except zlib.error as e:
        raise DecompressionFailed(e) from e

    if len(raw) > max_size:
        raise DecompressionFailed(ValueError(f"decoded source exceeds {max_size} bytes"))
    if not inflater.eof:
        raise DecompressionFailed(zlib.error("incomplete or truncated stream"))

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecompressionFailed(e) from e


def encode(source: str) -> str:
    """Encode diagram source into a PlantUML token (inverse of :func:`decode`)."""
    compressed = zlib.compress(source.encode("utf-8"), 9)
    standard = base64.b64encode(compressed).decode("ascii").rstrip("=")
    return standard.translate(_TO_PLANTUML)
