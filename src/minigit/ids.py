"""
Content-addressed object id utilities.

An object id is the SHA-1 digest of a canonical header followed by the
payload, rendered as 40 lowercase hex characters. Ids are derived, never
assigned: the same kind and payload always produce the same id.
"""

import hashlib
import string
from typing import Tuple

from minigit.errors import InvalidObjectIdError


OBJECT_KINDS = ("blob", "tree", "commit")

OBJECT_ID_LENGTH = 40

# Length of the fan-out directory name taken from the front of an id
FANOUT_LENGTH = 2

_HEX_DIGITS = frozenset(string.hexdigits)


def format_header(kind: str, length: int) -> bytes:
    """
    Build the canonical object header.

    Args:
        kind: Object kind ("blob", "tree", "commit")
        length: Byte length of the payload

    Returns:
        ASCII header terminated by a NUL byte

    Example:
        >>> format_header("blob", 3)
        b'blob 3\\x00'
    """
    return f"{kind} {length}\x00".encode("ascii")


def compute_object_id(kind: str, payload: bytes) -> str:
    """
    Compute the content id of an object.

    Args:
        kind: Object kind
        payload: Raw object payload

    Returns:
        40-character lowercase hex SHA-1 digest of header + payload

    Example:
        >>> compute_object_id("blob", b"hi\\n")
        '45b983be36b73c0788dc9cbcb76cbb80fc7bb057'
    """
    hasher = hashlib.sha1()
    hasher.update(format_header(kind, len(payload)))
    hasher.update(payload)
    return hasher.hexdigest()


def validate_object_id(oid: str) -> str:
    """
    Check that an id can be mapped to a storage location.

    Args:
        oid: Object id as supplied by a caller

    Returns:
        The id, lowercased

    Raises:
        InvalidObjectIdError: If the id is shorter than two characters or
            contains anything other than hex digits
    """
    if len(oid) < FANOUT_LENGTH:
        raise InvalidObjectIdError(oid, f"must be at least {FANOUT_LENGTH} characters")

    if not all(ch in _HEX_DIGITS for ch in oid):
        raise InvalidObjectIdError(oid, "must contain only hex digits")

    return oid.lower()


def split_object_id(oid: str) -> Tuple[str, str]:
    """
    Split an id into its fan-out directory and file name.

    Example:
        >>> split_object_id("45b983be36b73c0788dc9cbcb76cbb80fc7bb057")
        ('45', 'b983be36b73c0788dc9cbcb76cbb80fc7bb057')
    """
    oid = validate_object_id(oid)
    return oid[:FANOUT_LENGTH], oid[FANOUT_LENGTH:]


def is_full_object_id(oid: str) -> bool:
    """Return True if oid is a complete 40-character lowercase hex id."""
    if len(oid) != OBJECT_ID_LENGTH:
        return False
    return all(ch in "0123456789abcdef" for ch in oid)
