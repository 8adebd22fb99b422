"""Identity resolution: name keys, matching heuristics and person clusters.

Key modules:
- normalize: name-key and address normalization
- matcher: one-sided heuristic name matching
- cluster: PersonCluster aggregate
- resolver: sender seeding + mention assignment across a batch of emails
"""

from email_identity.identity.cluster import PersonCluster
from email_identity.identity.matcher import names_match
from email_identity.identity.normalize import normalize_email_address, normalize_name_key
from email_identity.identity.resolver import (
    IdentityResolver,
    merge_name_only_clusters,
    resolve_identities,
)

__all__ = [
    "IdentityResolver",
    "PersonCluster",
    "merge_name_only_clusters",
    "names_match",
    "normalize_email_address",
    "normalize_name_key",
    "resolve_identities",
]
