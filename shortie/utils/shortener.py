"""Shortcode generation utility

This module provides a helper function for generating short, deterministic
identifiers from the target URL itself: the same URL always shortens to the
same shortcode, which makes repeated shortening of a URL idempotent.

Functions:
    generate_shortcode(target, length=10):
        Generate a lowercase hex identifier suitable for use as a URL slug.

Example:
    >>> from shortie.utils import generate_shortcode
    >>> generate_shortcode('https://example.com/data/hi')
    '4e24c46962'
"""

import uuid

from shortie.constants import Shortcode


def generate_shortcode(target: str, length: int = Shortcode.DEFAULT_LENGTH) -> str:
    """Generate a short, deterministic identifier for a target URL.

    The target is hashed into a name-based (SHA-1) UUID within the URL
    namespace (RFC 4122, version 5). The identifier is the leading `length`
    hex digits of that UUID.

    Args:
        target (str):
            The URL to shorten. Hashed verbatim, never parsed or normalized.

        length (int, optional):
            Number of hex characters in the identifier. Defaults to 10.
            Must be between 1 and 32.

    Returns:
        str: A lowercase hex identifier of exactly `length` characters.

    Example:
        >>> generate_shortcode('https://example.com/data/hi', length=6)
        '4e24c4'

    NOTE:
        - Two different URLs may share a truncated identifier. Detecting that
          is up to the caller (see the shorten_url handler), which retries
          with a longer identifier.
    """
    if not isinstance(target, str):
        raise TypeError(f'Target must be of type string (given type: {type(target)}).')
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if not 1 <= length <= Shortcode.MAX_LENGTH:
        raise ValueError(f'Length must be between 1 and {Shortcode.MAX_LENGTH} (given length: {length}).')

    return uuid.uuid5(uuid.NAMESPACE_URL, target).hex[:length]
