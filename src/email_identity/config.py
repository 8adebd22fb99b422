"""Central configuration for the email identity resolver."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file from project root
load_dotenv()


class Config(BaseModel):
    """All configuration for the email identity resolver.

    Paths are relative to the project root unless absolute.
    The CoreNLP server location can be overridden via environment or .env file.
    """

    # Paths
    emails_path: Path = Path("data/emails.json")
    chains_path: Path = Path("data/chains.json")
    clusters_path: Path = Path("data/clusters.json")

    # Stanford CoreNLP server (coreference annotator)
    corenlp_url: str = Field(default=os.getenv("CORENLP_URL", "http://localhost:9000"))
    corenlp_timeout: float = Field(default=os.getenv("CORENLP_TIMEOUT", "120"), validate_default=True)
    corenlp_annotators: str = "tokenize,ssplit,pos,lemma,ner,parse,coref"
    corenlp_coref_algorithm: str = "neural"
    corenlp_language: str = "en"

    # Processing
    annotate_workers: int = 4
