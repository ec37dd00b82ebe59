"""LLM oracle access with deterministic fallbacks."""
from .client import OracleClient, extract_json_object
from .summarizer import (
    KeywordSummaryProvider,
    OracleSummaryProvider,
    RequirementsSummarizer,
    RequirementsSummary,
)

__all__ = [
    "OracleClient",
    "extract_json_object",
    "KeywordSummaryProvider",
    "OracleSummaryProvider",
    "RequirementsSummarizer",
    "RequirementsSummary",
]
