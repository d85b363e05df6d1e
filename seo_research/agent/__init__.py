"""Core agent modules."""

from .main import ResearchCLI, ResearchCliError, configure_logging
from .research_aggregator import ResearchAggregator, perform_enhanced_research

__all__ = [
    "ResearchAggregator",
    "perform_enhanced_research",
    "ResearchCLI",
    "ResearchCliError",
    "configure_logging",
]
