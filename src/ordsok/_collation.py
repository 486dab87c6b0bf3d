"""Norwegian (bokmål) collation keys.

The alphabet ends ``... x y z æ ø å``. Other accented letters sort with their
base letter, after the unaccented form. Following the Norwegian tailoring,
ä/ö are variants of æ/ø, ü of y, and a doubled "aa" sorts as å. Lower case
sorts before upper case when the letters are otherwise equal.
"""

from __future__ import annotations

import unicodedata

_Z = ord("z")
_TAIL = "æøå"

# lowercase letter -> (primary letters, variant rank)
_TAILORED: dict[str, tuple[str, int]] = {
    "æ": ("æ", 0), "ä": ("æ", 1), "ę": ("æ", 2),
    "ø": ("ø", 0), "ö": ("ø", 1), "ő": ("ø", 2), "œ": ("ø", 3),
    "å": ("å", 0),
    "ü": ("y", 1), "ű": ("y", 2),
    "đ": ("d", 1), "ð": ("d", 2),
    "þ": ("th", 1),
}

SortKey = tuple[tuple[int, ...], tuple[tuple[int, str], ...], tuple[bool, ...]]


def _weight(ch: str) -> int:
    i = _TAIL.find(ch)
    if i >= 0:
        return _Z + 1 + i
    o = ord(ch)
    return o if o <= _Z else o + len(_TAIL)


def norwegian_sort_key(text: str) -> SortKey:
    """Key that orders strings the way a Norwegian reader expects.

    Returns (primary letters, accent variants, case) so that accents and
    case only decide between strings that are otherwise equal.
    """
    text = unicodedata.normalize("NFC", text)
    primary: list[int] = []
    secondary: list[tuple[int, str]] = []
    tertiary: list[bool] = []

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        low = ch.casefold()

        if low == "a" and i + 1 < n and text[i + 1].casefold() == "a":
            primary.append(_weight("å"))
            secondary.append((1, ""))
            tertiary.append(ch.isupper())
            i += 2
            continue

        tailored = _TAILORED.get(low)
        if tailored is not None:
            letters, rank = tailored
            primary.extend(_weight(c) for c in letters)
            secondary.append((rank, ""))
        else:
            decomposed = unicodedata.normalize("NFKD", low)
            marks = "".join(c for c in decomposed if unicodedata.combining(c))
            primary.extend(
                _weight(c) for c in decomposed if not unicodedata.combining(c)
            )
            secondary.append((0, marks))
        tertiary.append(ch.isupper())
        i += 1

    return tuple(primary), tuple(secondary), tuple(tertiary)


def compare_norwegian(a: str, b: str) -> int:
    """Three-way comparison under Norwegian collation (-1, 0 or 1)."""
    ka = norwegian_sort_key(a)
    kb = norwegian_sort_key(b)
    return (ka > kb) - (ka < kb)
