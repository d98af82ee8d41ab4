"""
Conversation identity helpers.

A personal conversation is the unordered pair of its two participants. Every
chat record stores the canonical form of that pair so a conversation can be
looked up with a single equality match, whichever side sent the message.
"""
from .errors import InvalidArgument


def canonicalize(a: str, b: str) -> str:
    """Return the order-independent group key for participants ``a`` and ``b``.

    The identifiers are sorted lexicographically and joined behind a length
    prefix of the lower one, e.g. ``canonicalize('bob', 'alice') == '5:alice:bob'``.
    The prefix keeps distinct pairs distinct even if identifiers contain ':'.
    """
    if not a or not b or not a.strip() or not b.strip():
        raise InvalidArgument('Participant id must not be empty')
    low, high = sorted([a, b])
    return f'{len(low)}:{low}:{high}'
