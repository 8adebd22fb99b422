"""Heuristic name matching between a mention and a known full name."""

from email_identity.identity.normalize import normalize_name_key

# Shortest single token that may match a full name's first token.
MIN_FIRST_TOKEN_LENGTH = 3


def names_match(mention_text: str | None, full_name: str | None) -> bool:
    """Heuristic: does `mention_text` likely refer to the same person as `full_name`?

    Rules (very simple):
      - exact normalized name key match, OR
      - mention is a single token contained anywhere in the full normalized
        name ("tony" in "tony smith", but also "ann" in "joanne"), OR
      - mention is a single token of at least three characters equal to the
        first token of the full name.

    The check is deliberately one-sided: only a single-token *mention* can
    trigger the substring and first-token rules, so always pass the
    mention-derived string first.
    """
    mention_key = normalize_name_key(mention_text)
    full_key = normalize_name_key(full_name)

    if not mention_key or not full_key:
        return False

    if mention_key == full_key:
        return True

    mention_tokens = mention_key.split(" ")
    full_tokens = full_key.split(" ")

    if len(mention_tokens) != 1:
        return False

    # Single token contained in full name
    if mention_key in full_key:
        return True

    # First token match: "antonio" vs "antonio ache"
    token = mention_tokens[0]
    return len(token) >= MIN_FIRST_TOKEN_LENGTH and token == full_tokens[0]
