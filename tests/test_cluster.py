"""Tests for the PersonCluster aggregate."""

import pytest

from email_identity.identity.cluster import PersonCluster
from email_identity.models import Mention


def test_canonical_name_is_first_name_added():
    """The first name added becomes canonical and never changes."""
    cluster = PersonCluster("P1")
    cluster.add_name("Antonio Ache")
    cluster.add_name("Tony")
    assert cluster.canonical_name == "Antonio Ache"
    assert cluster.names == {"Antonio Ache", "Tony"}


def test_canonical_name_cannot_be_reassigned():
    """canonical_name is read-only."""
    cluster = PersonCluster("P1", canonical_name="Antonio Ache")
    with pytest.raises(AttributeError):
        cluster.canonical_name = "Tony"
    assert cluster.canonical_name == "Antonio Ache"


def test_constructor_name_is_recorded():
    """A name passed to the constructor is also a known name."""
    cluster = PersonCluster("P1", canonical_name="  Antonio Ache ")
    assert cluster.canonical_name == "Antonio Ache"
    assert cluster.names == {"Antonio Ache"}


def test_names_are_trimmed_and_blank_ignored():
    """Names are trimmed; blank names are dropped and set nothing."""
    cluster = PersonCluster("P1")
    cluster.add_name("   ")
    cluster.add_name(None)
    assert cluster.canonical_name is None
    cluster.add_name("  Tony ")
    assert cluster.names == {"Tony"}
    assert cluster.canonical_name == "Tony"


def test_email_addresses_lowercased():
    """Addresses are stored lower-cased; blank addresses are ignored."""
    cluster = PersonCluster("P1")
    cluster.add_email_address("Tony@Example.com")
    cluster.add_email_address("tony@example.com")
    cluster.add_email_address("")
    cluster.add_email_address(None)
    assert cluster.email_addresses == {"tony@example.com"}
    assert cluster.is_name_only is False


def test_mentions_keep_order():
    """Mentions are appended in processing order, duplicates included."""
    cluster = PersonCluster("P1")
    first = Mention("m1", 1, "Tony", 0, 0, 1)
    second = Mention("m2", 1, "he", 1, 3, 4)
    cluster.add_mention(first)
    cluster.add_mention(second)
    cluster.add_mention(first)
    assert cluster.mentions == [first, second, first]


def test_new_cluster_is_name_only():
    """A cluster without addresses is name-only."""
    assert PersonCluster("P7").is_name_only is True
