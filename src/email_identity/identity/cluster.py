"""Person-level cluster aggregate."""

from email_identity.models import Mention


class PersonCluster:
    """A person-level cluster across emails.

    All addresses, names and mentions held here are assumed to refer to the
    same individual. `canonical_name` is fixed by the first name ever added
    and cannot be reassigned afterwards.
    """

    def __init__(self, cluster_id: str, canonical_name: str | None = None):
        self.cluster_id = cluster_id
        self.email_addresses: set[str] = set()
        self.names: set[str] = set()
        self.mentions: list[Mention] = []
        self._canonical_name: str | None = None
        if canonical_name is not None:
            self.add_name(canonical_name)

    @property
    def canonical_name(self) -> str | None:
        return self._canonical_name

    @property
    def is_name_only(self) -> bool:
        """True when no address has ever been tied to this cluster."""
        return not self.email_addresses

    def add_email_address(self, email: str | None) -> None:
        if email and email.strip():
            self.email_addresses.add(email.strip().lower())

    def add_name(self, name: str | None) -> None:
        if not name or not name.strip():
            return
        name = name.strip()
        self.names.add(name)
        if self._canonical_name is None:
            self._canonical_name = name

    def add_mention(self, mention: Mention) -> None:
        self.mentions.append(mention)

    def __repr__(self) -> str:
        return (
            f"PersonCluster(cluster_id={self.cluster_id!r}, "
            f"email_addresses={sorted(self.email_addresses)}, "
            f"names={sorted(self.names)}, "
            f"mentions={len(self.mentions)})"
        )
