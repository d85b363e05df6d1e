"""Configuration management for the SEO Research Copilot."""

from .config_loader import ConfigurationError, ResearchJobLoader, load_research_jobs
from .settings import (
    ErrorHandlingSettings,
    JinaSettings,
    MonitoringSettings,
    PerplexitySettings,
    Settings,
    SourceSettings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "SourceSettings",
    "JinaSettings",
    "PerplexitySettings",
    "ErrorHandlingSettings",
    "MonitoringSettings",
    "get_settings",
    "reload_settings",
    "ConfigurationError",
    "ResearchJobLoader",
    "load_research_jobs",
]
