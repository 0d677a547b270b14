"""
Helpers for decomposing builtin call signatures.

Takes in a signature like `@intToEnum(comptime DestType: type, integer: anytype) DestType`
and derives its arguments (`comptime DestType: type`, `integer: anytype`) and an
editor snippet (`@intToEnum(${1:comptime DestType: type}, ${2:integer: anytype})`).
"""
from typing import Iterator, List

from zls_gen.exceptions import MalformedSignatureError


def _skip_group(signature: str, open_index: int) -> int:
    """Return the index just past the `)` balancing the `(` at `open_index`."""
    depth = 0
    for index in range(open_index, len(signature)):
        if signature[index] == "(":
            depth += 1
        elif signature[index] == ")":
            depth -= 1
            if depth == 0:
                return index + 1
    return len(signature)


def _top_level_arguments(signature: str, start: int) -> Iterator[str]:
    """
    Yield the trimmed, non-empty top-level arguments beginning at `start`.

    Parenthesised groups are kept whole; scanning stops at the first `)`
    that closes the parameter list.
    """
    argument_start = start
    index = start
    while index < len(signature):
        c = signature[index]
        if c == "(":
            index = _skip_group(signature, index)
            continue
        if c in ",)":
            argument = signature[argument_start:index].strip()
            if argument:
                yield argument
            if c == ")":
                return
            argument_start = index + 1
        index += 1

    # parameter list never closed
    argument = signature[argument_start:].strip()
    if argument:
        yield argument


def split_arguments(signature: str) -> List[str]:
    """
    Split a parameter list into its arguments.

    Args:
        signature: Text following the callee's opening parenthesis, e.g.
            `comptime T: type, value: T) T`.

    Returns:
        List of trimmed arguments in declaration order.
    """
    return list(_top_level_arguments(signature, 0))


def to_snippet(signature: str) -> str:
    """
    Build an editor snippet with one numbered placeholder per argument.

    Raises:
        MalformedSignatureError: If the signature has no parameter list.
    """
    open_index = signature.find("(")
    if open_index == -1:
        raise MalformedSignatureError(f"signature has no parameter list: {signature!r}")

    placeholders = [
        f"${{{i}:{argument}}}"
        for i, argument in enumerate(_top_level_arguments(signature, open_index + 1), start=1)
    ]
    return signature[:open_index + 1] + ", ".join(placeholders) + ")"
