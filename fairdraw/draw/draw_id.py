"""Short identifiers printed on draw results and report file names."""

from __future__ import annotations

import re

DRAW_ID_LENGTH = 8
_NON_BASE36 = re.compile(r"[^0-9a-z]")


def derive_draw_id(token: str, *, length: int = DRAW_ID_LENGTH) -> str:
    """Shorten a unique token to a draw identifier.

    Separators such as the hyphens of a UUID are dropped and letters are
    lower-cased, so the identifier only contains base36 characters (hex
    digits for a UUID).

    Parameters
    ----------
    token : str
        Unique identifier produced by the random source, typically a UUID.
    length : int, default: 8
        Number of leading base36 characters kept.

    Returns
    -------
    str
        The first ``length`` base36 characters of ``token``. Collisions
        between draws are possible and are not treated as errors.

    Raises
    ------
    ValueError
        If ``token`` holds fewer than ``length`` base36 characters.
    """

    if length <= 0:
        raise ValueError("length must be positive")
    characters = _NON_BASE36.sub("", token.lower())
    if len(characters) < length:
        raise ValueError(
            f"unique token {token!r} has {len(characters)} usable characters, "
            f"{length} required for a draw id"
        )
    return characters[:length]


__all__ = ["DRAW_ID_LENGTH", "derive_draw_id"]
