"""
Model Dispatch - multi-provider query dispatch and aggregation.

This package sends a conversation to several generative-AI backends and
aggregates their answers:
1. ``process_with_fallback`` tries the primary provider, then the secondary
   provider's models in catalog order, and always returns text
2. ``process_multi_model_query`` fans out to a prefix of the secondary
   catalog concurrently and reduces the outcomes (``parallel``/``fallback``)
"""

from dispatcher.services.dispatch import process_multi_model_query, process_with_fallback

__version__ = "0.1.0"

__all__ = ["process_multi_model_query", "process_with_fallback"]
