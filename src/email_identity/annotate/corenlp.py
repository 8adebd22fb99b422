"""Stanford CoreNLP server client for within-email coreference.

Posts each email body to a running CoreNLP server
(`java edu.stanford.nlp.pipeline.StanfordCoreNLPServer`) with the
tokenize/ssplit/pos/lemma/ner/parse/coref pipeline and reads the `corefs`
section of the JSON response. CoreNLP reports sentence and token positions
1-based; they are passed through unchanged as CorefSpan records.
"""

import json
import logging

import requests

from email_identity.config import Config
from email_identity.models import CorefSpan, EmailMessage

logger = logging.getLogger(__name__)

DEFAULT_CORENLP_URL = "http://localhost:9000"
DEFAULT_ANNOTATORS = "tokenize,ssplit,pos,lemma,ner,parse,coref"


class CoreNLPServerAnnotator:
    """Coreference annotator backed by a CoreNLP HTTP server.

    Safe to share between threads: every call is an independent HTTP request.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_CORENLP_URL,
        timeout: float = 120.0,
        annotators: str = DEFAULT_ANNOTATORS,
        coref_algorithm: str = "neural",
        language: str = "en",
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.properties = {
            "annotators": annotators,
            "coref.algorithm": coref_algorithm,
            "coref.language": language,
            "outputFormat": "json",
        }

    @classmethod
    def from_config(cls, config: Config) -> "CoreNLPServerAnnotator":
        return cls(
            base_url=config.corenlp_url,
            timeout=config.corenlp_timeout,
            annotators=config.corenlp_annotators,
            coref_algorithm=config.corenlp_coref_algorithm,
            language=config.corenlp_language,
        )

    def annotate(self, email: EmailMessage) -> dict[int, list[CorefSpan]]:
        """Run coreference over an email body."""
        return self.annotate_text(email.body)

    def annotate_text(self, text: str) -> dict[int, list[CorefSpan]]:
        """Run coreference over raw text.

        Args:
            text: Document text (one email body).

        Returns:
            Chain id -> spans with CoreNLP's 1-based indices. Empty when the
            text is blank or no chains were found.

        Raises:
            requests.exceptions.RequestException: If the server call fails
                or the response body is not valid JSON.
        """
        if not text or not text.strip():
            return {}

        try:
            response = requests.post(
                f"{self.base_url}/",
                params={"properties": json.dumps(self.properties)},
                data=text.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            document = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"CoreNLP request failed: {e}")
            raise

        return parse_corefs(document)

    def ping(self) -> bool:
        """Check if the CoreNLP server is running and ready."""
        try:
            response = requests.get(f"{self.base_url}/ready", timeout=5)
            response.raise_for_status()
            logger.info(f"CoreNLP server is available at {self.base_url}")
            return True
        except requests.exceptions.RequestException as e:
            logger.warning(f"CoreNLP availability check failed: {e}")
            return False


def parse_corefs(document: dict) -> dict[int, list[CorefSpan]]:
    """Extract coreference chains from a CoreNLP JSON document.

    Args:
        document: Parsed JSON response with a `corefs` mapping of
            chain id (string) -> list of mention objects.

    Returns:
        Chain id (int) -> spans.
    """
    chains: dict[int, list[CorefSpan]] = {}
    for chain_id, raw_mentions in (document.get("corefs") or {}).items():
        chains[int(chain_id)] = [
            CorefSpan(
                text=m.get("text", ""),
                sentence_index=int(m["sentNum"]),
                start_index=int(m["startIndex"]),
                end_index=int(m["endIndex"]),
            )
            for m in raw_mentions
        ]
    return chains
