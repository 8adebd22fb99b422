"""Name and address normalization.

Turns free-text display names and mention strings into lookup keys so that
"Dr. José Ruiz", "jose ruiz" and "JOSE  RUIZ" all collide:

- lower case
- strip accents
- strip titles like "dr.", "mr.", "ms."
- remove punctuation
- collapse whitespace
"""

import re
import unicodedata

HONORIFIC_TITLES: tuple[str, ...] = ("dr", "mr", "mrs", "ms", "prof")

# A title only counts when it stands alone: bounded by anything that survives
# punctuation removal as a separator (or by the string ends).
_TITLE_RE = re.compile(
    r"(?<![a-z0-9])(?:" + "|".join(HONORIFIC_TITLES) + r")(?![a-z0-9])\.?"
)
_NON_KEY_CHARS_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))


def normalize_name_key(raw: str | None) -> str:
    """Normalize a name into a key suitable for equality / map lookups.

    Args:
        raw: Display name or mention text. None is allowed.

    Returns:
        The canonical key, or "" when nothing is left.
    """
    if not raw:
        return ""

    s = raw.strip().lower()
    s = _strip_accents(s)
    s = _TITLE_RE.sub("", s)
    s = _NON_KEY_CHARS_RE.sub(" ", s)
    s = _WHITESPACE_RE.sub(" ", s).strip()
    return s


def normalize_email_address(raw: str | None) -> str | None:
    """Trim and lower-case an address; blank or missing input gives None."""
    if raw is None:
        return None
    address = raw.strip()
    if not address:
        return None
    return address.lower()
