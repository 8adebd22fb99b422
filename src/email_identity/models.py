"""Plain data records exchanged between the annotator and the resolver.

Email messages come in from the loader, coreference spans come out of the
annotator (1-based indices, as the annotator reports them), and mentions are
the 0-based records the resolver consumes.
"""

from dataclasses import dataclass, field


@dataclass
class EmailMessage:
    """A single email as handed to the annotator and the resolver."""

    message_id: str
    thread_id: str | None = None
    from_name: str | None = None
    from_email: str | None = None
    subject: str | None = None
    body: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "EmailMessage":
        """Build an EmailMessage from a JSON-style dict (missing keys -> None)."""
        return cls(
            message_id=data.get("message_id", ""),
            thread_id=data.get("thread_id"),
            from_name=data.get("from_name"),
            from_email=data.get("from_email"),
            subject=data.get("subject"),
            body=data.get("body") or "",
        )


@dataclass(frozen=True)
class CorefSpan:
    """One mention span as reported by the coreference annotator.

    All indices are 1-based, exactly as the annotator produces them.
    `end_index` is exclusive.
    """

    text: str
    sentence_index: int
    start_index: int
    end_index: int


@dataclass(frozen=True)
class Mention:
    """A coreference mention with email-local context.

    `local_cluster_id` is the annotator's chain id and only means something
    inside `email_id`. Sentence and token indices are 0-based.
    """

    email_id: str
    local_cluster_id: int
    text: str
    sentence_index: int
    start_token: int
    end_token: int


@dataclass
class EmailWithMentions:
    """Bundles an email with the mentions the annotator found in its body."""

    email: EmailMessage
    mentions: list[Mention] = field(default_factory=list)
