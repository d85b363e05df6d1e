"""
Batch research job loader.

Job files are YAML documents listing the keywords to research, either as a
top-level list or under a ``jobs`` key:

    jobs:
      - keyword: zinc absorption
        output_file: zinc-absorption.json
      - keyword: vitamin d deficiency
        enabled: false
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import ValidationError

from ..models.research import ResearchJob

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Exception raised when configuration loading fails."""

    pass


class ResearchJobLoader:
    """Loader for batch research job files."""

    def __init__(self, jobs_file: Union[str, Path]):
        """
        Initialize the job loader.

        Args:
            jobs_file: Path to the YAML job file
        """
        self.jobs_file = Path(jobs_file)

    def load_jobs(self, include_disabled: bool = False) -> List[ResearchJob]:
        """
        Load and validate research jobs.

        Args:
            include_disabled: Also return jobs marked ``enabled: false``

        Returns:
            List[ResearchJob]: Validated jobs in file order

        Raises:
            ConfigurationError: If the file is missing, malformed or invalid
        """
        if not self.jobs_file.exists():
            raise ConfigurationError(f"Job file not found: {self.jobs_file}")

        logger.info(f"Loading research jobs from {self.jobs_file}")

        try:
            with open(self.jobs_file, "r", encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in job file: {e}")

        entries = self._extract_entries(raw_data)

        jobs = []
        for index, entry in enumerate(entries):
            if isinstance(entry, str):
                entry = {"keyword": entry}
            if not isinstance(entry, dict):
                raise ConfigurationError(
                    f"Job #{index + 1} must be a mapping or a keyword string"
                )
            try:
                jobs.append(ResearchJob(**entry))
            except ValidationError as e:
                raise ConfigurationError(f"Job #{index + 1} validation failed: {e}")

        if not include_disabled:
            skipped = [job.keyword for job in jobs if not job.enabled]
            if skipped:
                logger.info(f"Skipping disabled jobs: {', '.join(skipped)}")
            jobs = [job for job in jobs if job.enabled]

        logger.info(f"Loaded {len(jobs)} research jobs")
        return jobs

    def _extract_entries(self, raw_data: Any) -> List[Union[str, Dict[str, Any]]]:
        if raw_data is None:
            return []
        if isinstance(raw_data, list):
            return raw_data
        if isinstance(raw_data, dict) and isinstance(raw_data.get("jobs"), list):
            return raw_data["jobs"]
        raise ConfigurationError(
            "Job file must contain a list of jobs or a 'jobs' list"
        )


def load_research_jobs(
    jobs_file: Union[str, Path], include_disabled: bool = False
) -> List[ResearchJob]:
    """
    Convenience function to load research jobs.

    Args:
        jobs_file: Path to the YAML job file
        include_disabled: Also return disabled jobs

    Returns:
        List[ResearchJob]: Validated jobs
    """
    return ResearchJobLoader(jobs_file).load_jobs(include_disabled=include_disabled)
