"""Cross-email identity resolution.

Builds person clusters from a batch of emails with their coreference mentions:

1. Sender seeding: every email's From header (address + display name) gets a
   cluster before any mention is looked at.
2. Mention assignment: every mention joins the sender's cluster, a cluster
   with a matching name, or a fresh name-only cluster.
3. Merge stage: currently an identity transform (see merge_name_only_clusters).

All state lives on one IdentityResolver instance. Use a fresh instance, or
resolve_identities(), per batch.
"""

import logging
from collections.abc import Iterable, Sequence

from email_identity.identity.cluster import PersonCluster
from email_identity.identity.matcher import names_match
from email_identity.identity.normalize import normalize_email_address, normalize_name_key
from email_identity.models import EmailMessage, EmailWithMentions

logger = logging.getLogger(__name__)

CLUSTER_ID_PREFIX = "P"


def merge_name_only_clusters(clusters: list[PersonCluster]) -> list[PersonCluster]:
    """Merge clusters that share a normalized name key but were never unified.

    Not implemented: this stage returns its input unchanged. A real merge would
    pick one cluster per name key and fold the others into it (names,
    addresses, mentions), then drop the absorbed clusters from the result.
    """
    return clusters


class IdentityResolver:
    """Assigns senders and coreference mentions to person clusters.

    Maintains two lookup indices over the clusters it creates:
    `by_email` (normalized address -> cluster, last writer wins) and
    `by_name_key` (normalized name key -> cluster, first claim wins).
    Both are updated in the same step as the cluster they point to.
    """

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self.by_email: dict[str, PersonCluster] = {}
        self.by_name_key: dict[str, PersonCluster] = {}
        self.clusters: list[PersonCluster] = []
        self._next_cluster_id = 1

    # ------------------------------------------------------------------ #
    #  Public API                                                         #
    # ------------------------------------------------------------------ #

    def resolve(self, emails: Sequence[EmailWithMentions]) -> list[PersonCluster]:
        """Produce person clusters from a batch of emails with mentions.

        Emails are processed in the given order; that order decides cluster
        ids and which cluster an address points to when it changes hands.

        Args:
            emails: Emails paired with their (0-based) mentions.

        Returns:
            Every cluster created during the run, in creation order.
        """
        self._reset()

        for item in emails:
            self.seed_sender(item.email)
        logger.info(f"Seeded {len(self.clusters)} sender clusters from {len(emails)} emails")

        seeded = len(self.clusters)
        assigned = 0
        for item in emails:
            assigned += self.assign_mentions(item)
        logger.info(
            f"Assigned {assigned} mentions, "
            f"{len(self.clusters) - seeded} new name-only clusters"
        )

        return merge_name_only_clusters(list(self.clusters))

    def seed_sender(self, email: EmailMessage) -> PersonCluster | None:
        """Ensure the sender of `email` has a cluster.

        Returns:
            The sender's cluster, or None when the email has neither a
            usable address nor a display name.
        """
        address = normalize_email_address(email.from_email)
        name = _clean_name(email.from_name)

        if address is None and name is None:
            return None

        name_key = normalize_name_key(name)

        cluster = None
        if address is not None:
            cluster = self.by_email.get(address)
        if cluster is None and name_key:
            cluster = self.by_name_key.get(name_key)
        if cluster is None:
            cluster = self._create_cluster()

        if address is not None:
            self.by_email[address] = cluster
            cluster.add_email_address(address)

        if name is not None:
            if name_key:
                self.by_name_key.setdefault(name_key, cluster)
            cluster.add_name(name)

        return cluster

    def assign_mentions(self, item: EmailWithMentions) -> int:
        """Attach every mention of one email to a cluster.

        Returns:
            Number of mentions assigned (blank mentions are skipped).
        """
        email = item.email
        sender_address = normalize_email_address(email.from_email)
        sender_cluster = self.by_email.get(sender_address) if sender_address else None

        assigned = 0
        for mention in item.mentions:
            text = mention.text
            if not text or not text.strip():
                continue

            cluster = None

            # 1) Does it clearly look like the sender?
            if sender_cluster is not None and names_match(text, email.from_name):
                cluster = sender_cluster

            # 2) Otherwise, try known names in existing clusters
            if cluster is None:
                cluster = self.find_cluster_by_name(text)

            # 3) Still nothing: start a name-only cluster for this mention
            if cluster is None:
                cluster = self._create_cluster()
                key = normalize_name_key(text)
                if key:
                    self.by_name_key.setdefault(key, cluster)
                cluster.add_name(text)

            cluster.add_mention(mention)
            assigned += 1
            logger.debug(f"{email.message_id}: {text!r} -> {cluster.cluster_id}")

        return assigned

    def find_cluster_by_name(self, mention_text: str) -> PersonCluster | None:
        """Find a cluster whose known names match `mention_text`.

        A direct name-key hit wins. Otherwise clusters reachable by address are
        scanned before name-only ones and the first heuristic match is
        returned; when several clusters match, which one comes first follows
        index iteration order and callers must not depend on it.
        """
        key = normalize_name_key(mention_text)
        if key:
            cluster = self.by_name_key.get(key)
            if cluster is not None:
                return cluster

        cluster = _first_matching(mention_text, self.by_email.values())
        if cluster is not None:
            return cluster

        return _first_matching(mention_text, self.by_name_key.values())

    # ------------------------------------------------------------------ #
    #  Internals                                                          #
    # ------------------------------------------------------------------ #

    def _create_cluster(self) -> PersonCluster:
        cluster = PersonCluster(f"{CLUSTER_ID_PREFIX}{self._next_cluster_id}")
        self._next_cluster_id += 1
        self.clusters.append(cluster)
        return cluster


def _clean_name(name: str | None) -> str | None:
    if name is None or not name.strip():
        return None
    return name


def _first_matching(mention_text: str, clusters: Iterable[PersonCluster]) -> PersonCluster | None:
    for cluster in clusters:
        for name in cluster.names:
            if names_match(mention_text, name):
                return cluster
    return None


def resolve_identities(emails: Sequence[EmailWithMentions]) -> list[PersonCluster]:
    """Run one resolution pass over `emails` with a fresh resolver."""
    return IdentityResolver().resolve(emails)
