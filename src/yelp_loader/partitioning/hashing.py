"""
64-bit FNV-1a hashing.

Partition assignment is recomputed in separate transactions (and possibly
separate processes), so the hash must be stable everywhere. Python's
built-in ``hash`` is salted per process and cannot be used.
"""

from yelp_loader.shared.exceptions import HashInputError

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
_MASK_64 = 0xFFFFFFFFFFFFFFFF


def fnv1a_64(data: bytes | str) -> int:
    """
    Hash bytes (or a UTF-8 encoded string) with 64-bit FNV-1a.

    Args:
        data: Input bytes or string

    Returns:
        Unsigned 64-bit hash; the offset basis for empty input

    Raises:
        HashInputError: If data is neither bytes nor str

    Example:
        >>> hex(fnv1a_64(b"a"))
        '0xaf63dc4c8601ec8c'
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif not isinstance(data, (bytes, bytearray, memoryview)):
        raise HashInputError(data)

    h = FNV64_OFFSET_BASIS
    for byte in bytes(data):
        h ^= byte
        h = (h * FNV64_PRIME) & _MASK_64
    return h
