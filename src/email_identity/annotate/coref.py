"""Coreference annotation boundary.

The annotator turns an email body into local coreference chains:
{chain_id: [CorefSpan, ...]} with 1-based sentence/token indices. This module
flattens those chains into 0-based Mention records and runs an annotator over
a batch of emails.
"""

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Protocol

from tqdm import tqdm

from email_identity.models import CorefSpan, EmailMessage, EmailWithMentions, Mention

logger = logging.getLogger(__name__)

CorefChains = Mapping[int, Sequence[CorefSpan]]


class AnnotationError(RuntimeError):
    """Raised when one or more emails could not be annotated."""

    def __init__(self, failed: dict[str, str]):
        self.failed = failed
        ids = ", ".join(sorted(failed))
        super().__init__(f"Annotation failed for {len(failed)} email(s): {ids}")


class CorefAnnotator(Protocol):
    """Anything that can produce coreference chains for an email."""

    def annotate(self, email: EmailMessage) -> CorefChains | None: ...


class PrecomputedAnnotator:
    """Serves chains computed earlier, keyed by message id.

    Emails without an entry have no chains.
    """

    def __init__(self, chains_by_message: Mapping[str, CorefChains]):
        self.chains_by_message = chains_by_message

    def annotate(self, email: EmailMessage) -> CorefChains | None:
        return self.chains_by_message.get(email.message_id)


def mentions_from_chains(email_id: str, chains: CorefChains | None) -> list[Mention]:
    """Flatten an email's coreference chains into Mention records.

    Args:
        email_id: Message id of the email the chains belong to.
        chains: Chain id -> spans, as returned by the annotator. None means
            no coreference was found.

    Returns:
        Mentions in chain order, textual order within each chain, with
        sentence and token indices shifted to 0-based.
    """
    mentions: list[Mention] = []
    if not chains:
        return mentions

    for chain_id, spans in chains.items():
        ordered = sorted(spans, key=lambda s: (s.sentence_index, s.start_index, s.end_index))
        for span in ordered:
            mentions.append(
                Mention(
                    email_id=email_id,
                    local_cluster_id=int(chain_id),
                    text=span.text,
                    sentence_index=span.sentence_index - 1,
                    start_token=span.start_index - 1,
                    end_token=span.end_index - 1,
                )
            )
    return mentions


def run_annotator(
    emails: Sequence[EmailMessage],
    annotator: CorefAnnotator,
    num_workers: int = 1,
) -> list[CorefChains | None]:
    """Run the annotator over a batch of emails, possibly in parallel.

    Results come back in the order of `emails` regardless of which worker
    finished first, so the resolver always sees a fixed email order.

    Args:
        emails: Emails to annotate.
        annotator: Coreference annotator (must be thread-safe if num_workers > 1).
        num_workers: Number of worker threads.

    Returns:
        The chains of each email, aligned with `emails`.

    Raises:
        AnnotationError: If any email failed; raised after the whole batch ran.
    """
    results: list[CorefChains | None] = [None] * len(emails)
    failed: dict[str, str] = {}
    first_error: Exception | None = None

    with ThreadPoolExecutor(max_workers=max(1, num_workers)) as executor:
        futures = {
            executor.submit(annotator.annotate, email): idx
            for idx, email in enumerate(emails)
        }

        with tqdm(total=len(emails), desc="Annotating emails") as pbar:
            for future in as_completed(futures):
                idx = futures[future]
                message_id = emails[idx].message_id
                try:
                    results[idx] = future.result()
                except Exception as e:
                    failed[message_id] = str(e)
                    first_error = first_error or e
                    logger.error(f"{message_id}: Annotation failed: {e}")
                pbar.update(1)

    if failed:
        raise AnnotationError(failed) from first_error

    logger.info(f"Annotated {len(emails)} emails")
    return results


def annotate_batch(
    emails: Sequence[EmailMessage],
    annotator: CorefAnnotator,
    num_workers: int = 1,
) -> list[EmailWithMentions]:
    """Annotate a batch of emails and flatten their chains into mentions.

    Returns:
        One EmailWithMentions per email, in input order.

    Raises:
        AnnotationError: If any email could not be annotated.
    """
    all_chains = run_annotator(emails, annotator, num_workers=num_workers)
    return [
        EmailWithMentions(email=email, mentions=mentions_from_chains(email.message_id, chains))
        for email, chains in zip(emails, all_chains)
    ]
