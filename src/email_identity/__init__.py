"""Email Identity Resolution.

Cross-email person clustering: merges sender headers and per-email
coreference mentions into durable person clusters.
"""

__version__ = "0.1.0"
