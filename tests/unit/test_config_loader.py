"""Unit tests for the batch research job loader."""

import tempfile
from pathlib import Path

import pytest

from seo_research.config.config_loader import (
    ConfigurationError,
    ResearchJobLoader,
    load_research_jobs,
)


class TestResearchJobLoader:
    """Test YAML job file loading."""

    @pytest.fixture
    def temp_dir(self):
        """Create temporary directory for job files."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir)

    def _write(self, directory: Path, content: str) -> Path:
        path = directory / "jobs.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    def test_load_jobs_mapping(self, temp_dir):
        """Test loading jobs listed under a jobs key."""
        jobs_file = self._write(
            temp_dir,
            """
jobs:
  - keyword: zinc absorption
    output_file: zinc.json
  - keyword: vitamin d deficiency
""",
        )

        jobs = ResearchJobLoader(jobs_file).load_jobs()

        assert [job.keyword for job in jobs] == ["zinc absorption", "vitamin d deficiency"]
        assert jobs[0].output_file == "zinc.json"
        assert jobs[1].output_file is None

    def test_load_jobs_plain_list(self, temp_dir):
        """Test loading a top-level list of keyword strings."""
        jobs_file = self._write(temp_dir, "- zinc absorption\n- weight loss\n")

        jobs = load_research_jobs(jobs_file)

        assert [job.keyword for job in jobs] == ["zinc absorption", "weight loss"]

    def test_disabled_jobs_skipped(self, temp_dir):
        """Test disabled jobs are filtered unless requested."""
        jobs_file = self._write(
            temp_dir,
            """
jobs:
  - keyword: zinc absorption
  - keyword: weight loss
    enabled: false
""",
        )

        assert len(load_research_jobs(jobs_file)) == 1
        assert len(load_research_jobs(jobs_file, include_disabled=True)) == 2

    def test_empty_file(self, temp_dir):
        """Test that an empty file yields no jobs."""
        jobs_file = self._write(temp_dir, "")

        assert load_research_jobs(jobs_file) == []

    def test_missing_file(self, temp_dir):
        """Test missing job file."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_research_jobs(temp_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_dir):
        """Test malformed YAML."""
        jobs_file = self._write(temp_dir, "jobs: [unclosed")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_research_jobs(jobs_file)

    def test_invalid_structure(self, temp_dir):
        """Test a document that is neither a list nor a jobs mapping."""
        jobs_file = self._write(temp_dir, "keyword: zinc\n")

        with pytest.raises(ConfigurationError, match="list of jobs"):
            load_research_jobs(jobs_file)

    def test_invalid_job_entry(self, temp_dir):
        """Test job validation errors name the job."""
        jobs_file = self._write(temp_dir, "jobs:\n  - keyword: zinc\n  - keyword: ''\n")

        with pytest.raises(ConfigurationError, match="Job #2"):
            load_research_jobs(jobs_file)

    def test_non_mapping_entry(self, temp_dir):
        """Test entries that are neither strings nor mappings."""
        jobs_file = self._write(temp_dir, "jobs:\n  - [zinc, iron]\n")

        with pytest.raises(ConfigurationError, match="mapping or a keyword string"):
            load_research_jobs(jobs_file)
