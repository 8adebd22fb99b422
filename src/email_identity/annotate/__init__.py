"""Coreference annotation: turns email bodies into email-local mentions.

Key modules:
- coref: annotator protocol, chain flattening, batch annotation
- corenlp: Stanford CoreNLP server client
"""

from email_identity.annotate.coref import (
    AnnotationError,
    CorefAnnotator,
    PrecomputedAnnotator,
    annotate_batch,
    mentions_from_chains,
    run_annotator,
)
from email_identity.annotate.corenlp import CoreNLPServerAnnotator, parse_corefs

__all__ = [
    "AnnotationError",
    "CoreNLPServerAnnotator",
    "CorefAnnotator",
    "PrecomputedAnnotator",
    "annotate_batch",
    "mentions_from_chains",
    "parse_corefs",
    "run_annotator",
]
