"""Loading emails and coreference chains from JSON files.

Emails file: a JSON list of objects with keys message_id, thread_id,
from_name, from_email, subject, body.

Chains file: {message_id: {chain_id: [{text, sentence_index, start_index,
end_index}, ...]}} with the annotator's 1-based indices.
"""

import json
import logging
from pathlib import Path

from email_identity.models import CorefSpan, EmailMessage

logger = logging.getLogger(__name__)


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error(f"{path}: Failed to parse JSON: {e}")
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def load_emails(path: Path) -> list[EmailMessage]:
    """Load a batch of emails, preserving file order.

    Raises:
        ValueError: If the file is not valid JSON, its root is not a list,
            or an entry is not an object.
    """
    data = _read_json(path)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of emails, got {type(data).__name__}")

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: email #{i} is not an object")

    emails = [EmailMessage.from_dict(item) for item in data]
    logger.info(f"Loaded {len(emails)} emails from {path}")
    return emails


def load_chains(path: Path) -> dict[str, dict[int, list[CorefSpan]]]:
    """Load precomputed coreference chains keyed by message id.

    Raises:
        ValueError: If the file is not valid JSON, its root is not an object,
            or an email's chains or spans are malformed.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object keyed by message id")

    chains: dict[str, dict[int, list[CorefSpan]]] = {}
    for message_id, raw_chains in data.items():
        if raw_chains is not None and not isinstance(raw_chains, dict):
            raise ValueError(f"{path}: chains for {message_id} are not an object")
        try:
            chains[message_id] = {
                int(chain_id): [
                    CorefSpan(
                        text=span["text"],
                        sentence_index=int(span["sentence_index"]),
                        start_index=int(span["start_index"]),
                        end_index=int(span["end_index"]),
                    )
                    for span in spans
                ]
                for chain_id, spans in (raw_chains or {}).items()
            }
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"{path}: malformed chains for {message_id}: {e}") from e

    logger.info(f"Loaded chains for {len(chains)} emails from {path}")
    return chains


def save_chains(chains: dict[str, dict[int, list[CorefSpan]]], path: Path) -> None:
    """Write chains in the format read by load_chains."""
    payload = {
        message_id: {
            str(chain_id): [
                {
                    "text": span.text,
                    "sentence_index": span.sentence_index,
                    "start_index": span.start_index,
                    "end_index": span.end_index,
                }
                for span in spans
            ]
            for chain_id, spans in email_chains.items()
        }
        for message_id, email_chains in chains.items()
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info(f"Saved chains for {len(chains)} emails to {path}")
