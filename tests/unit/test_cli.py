"""Unit tests for the command-line interface."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from seo_research.agent import main
from seo_research.agent.main import ResearchCLI, keyword_slug, render_research
from seo_research.config.settings import (
    JinaSettings,
    MonitoringSettings,
    PerplexitySettings,
    Settings,
)
from seo_research.models.research import EnhancedResearchData
from seo_research.utils.research_analysis import build_fallback_research_data


def research_for(keyword, **credentials):
    return EnhancedResearchData(keyword=keyword, wikipedia_data=[f"{keyword} summary"])


@pytest.fixture(autouse=True)
def logging_config(monkeypatch):
    """Keep CLI runs from reconfiguring global logging."""
    configure = MagicMock()
    monkeypatch.setattr(main, "configure_logging", configure)
    return configure


@pytest.fixture
def cli():
    """CLI with explicit credentials and a mock aggregator."""
    cli = ResearchCLI(
        settings=Settings(
            jina=JinaSettings(api_key="jina_from_settings"),
            perplexity=PerplexitySettings(api_key=None),
        )
    )
    cli.aggregator = MagicMock()
    cli.aggregator.research = AsyncMock(side_effect=research_for)
    return cli


class TestHelpers:
    """Test CLI helper functions."""

    @pytest.mark.parametrize(
        "keyword,expected",
        [
            ("Vitamin D Deficiency", "vitamin-d-deficiency"),
            ("  c++ & rust!  ", "c-rust"),
            ("???", "research"),
        ],
    )
    def test_keyword_slug(self, keyword, expected):
        """Test file-name slugs."""
        assert keyword_slug(keyword) == expected

    def test_render_json(self):
        """Test JSON output uses camelCase field names."""
        payload = json.loads(render_research(research_for("zinc"), "json"))

        assert payload["keyword"] == "zinc"
        assert payload["wikipediaData"] == ["zinc summary"]
        assert payload["isFallback"] is False

    def test_render_text(self):
        """Test text output is the research brief."""
        output = render_research(research_for("zinc"), "text")

        assert output.startswith("COMPREHENSIVE RESEARCH DATA FOR: zinc")


class TestResearchCLI:
    """Test suite for ResearchCLI."""

    @pytest.mark.asyncio
    async def test_no_command(self, cli, capsys):
        """Test running without a command prints help."""
        exit_code = await cli.run([])

        assert exit_code == 1
        assert "usage: seo-research" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_research_prints_json(self, cli, capsys):
        """Test research output on stdout."""
        exit_code = await cli.run(["research", "zinc absorption"])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["keyword"] == "zinc absorption"

    @pytest.mark.asyncio
    async def test_research_credentials(self, cli):
        """Test flags win over settings credentials."""
        await cli.run(["research", "zinc", "--perplexity-key", "pplx_flag"])

        cli.aggregator.research.assert_awaited_once_with(
            "zinc", jina_api_key="jina_from_settings", perplexity_api_key="pplx_flag"
        )

    @pytest.mark.asyncio
    async def test_research_writes_text_file(self, cli, tmp_path, capsys):
        """Test research output written to a file."""
        output_file = tmp_path / "briefs" / "zinc.txt"

        exit_code = await cli.run(
            ["research", "zinc", "--format", "text", "--output", str(output_file)]
        )

        assert exit_code == 0
        assert output_file.read_text(encoding="utf-8").startswith(
            "COMPREHENSIVE RESEARCH DATA FOR: zinc"
        )
        assert "written to" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_research_write_failure(self, cli, tmp_path):
        """Test an unwritable output path returns an error code."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        exit_code = await cli.run(
            ["research", "zinc", "--output", str(blocker / "out.json")]
        )

        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_verbose_logging(self, cli, logging_config):
        """Test --verbose switches to debug logging."""
        await cli.run(["--verbose", "keywords", "zinc"])

        logging_config.assert_called_once_with("DEBUG", "console")

    @pytest.mark.asyncio
    async def test_debug_setting_logging(self, logging_config):
        """Test the debug setting switches to debug logging without --verbose."""
        cli = ResearchCLI(settings=Settings(debug=True))

        await cli.run(["keywords", "zinc"])

        logging_config.assert_called_once_with("DEBUG", "console")

    @pytest.mark.asyncio
    async def test_configured_log_level(self, logging_config):
        """Test the monitoring log level is used by default."""
        cli = ResearchCLI(
            settings=Settings(debug=False, monitoring=MonitoringSettings(log_level="warning"))
        )

        await cli.run(["keywords", "zinc"])

        logging_config.assert_called_once_with("WARNING", "console")

    @pytest.mark.asyncio
    async def test_keywords(self, cli, capsys):
        """Test keyword variations are printed without research."""
        exit_code = await cli.run(["keywords", "make money online"])

        assert exit_code == 0
        output = capsys.readouterr().out
        assert "  - online earning opportunities" in output
        assert "  - online income generation" in output
        cli.aggregator.research.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_aggregator_error(self, cli):
        """Test unexpected errors return an error code."""
        cli.aggregator.research = AsyncMock(side_effect=RuntimeError("boom"))

        assert await cli.run(["research", "zinc"]) == 1


class TestBatchCommand:
    """Test the batch command."""

    @pytest.mark.asyncio
    async def test_batch(self, cli, tmp_path, capsys):
        """Test every enabled job is researched and written."""
        jobs_file = tmp_path / "jobs.yaml"
        jobs_file.write_text(
            "jobs:\n"
            "  - keyword: Zinc Absorption\n"
            "  - keyword: vitamin d deficiency\n"
            "    output_file: vitamin-d.txt\n"
            "  - keyword: skipped keyword\n"
            "    enabled: false\n",
            encoding="utf-8",
        )
        output_dir = tmp_path / "out"

        exit_code = await cli.run(
            ["batch", "--jobs", str(jobs_file), "--output-dir", str(output_dir)]
        )

        assert exit_code == 0
        assert cli.aggregator.research.await_count == 2

        zinc = json.loads((output_dir / "zinc-absorption.json").read_text(encoding="utf-8"))
        assert zinc["keyword"] == "Zinc Absorption"
        assert (output_dir / "vitamin-d.txt").read_text(encoding="utf-8").startswith(
            "COMPREHENSIVE RESEARCH DATA FOR: vitamin d deficiency"
        )
        assert not (output_dir / "skipped-keyword.json").exists()
        assert "BATCH RESEARCH COMPLETED" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_batch_include_disabled(self, cli, tmp_path):
        """Test disabled jobs run with --include-disabled."""
        jobs_file = tmp_path / "jobs.yaml"
        jobs_file.write_text("- keyword: zinc\n  enabled: false\n", encoding="utf-8")

        exit_code = await cli.run(
            [
                "batch",
                "--jobs",
                str(jobs_file),
                "--output-dir",
                str(tmp_path),
                "--include-disabled",
            ]
        )

        assert exit_code == 0
        assert (tmp_path / "zinc.json").exists()

    @pytest.mark.asyncio
    async def test_batch_marks_fallback(self, cli, tmp_path, capsys):
        """Test fallback records are flagged in the summary."""
        cli.aggregator.research = AsyncMock(
            side_effect=lambda keyword, **kwargs: build_fallback_research_data(keyword)
        )
        jobs_file = tmp_path / "jobs.yaml"
        jobs_file.write_text("- zinc\n", encoding="utf-8")

        await cli.run(["batch", "--jobs", str(jobs_file), "--output-dir", str(tmp_path)])

        assert "zinc (fallback) ->" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_missing_jobs_file(self, cli, tmp_path):
        """Test a missing job file returns an error code."""
        exit_code = await cli.run(["batch", "--jobs", str(tmp_path / "missing.yaml")])

        assert exit_code == 1
        cli.aggregator.research.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_jobs_file(self, cli, tmp_path, capsys):
        """Test an empty job file is not an error."""
        jobs_file = tmp_path / "jobs.yaml"
        jobs_file.write_text("", encoding="utf-8")

        exit_code = await cli.run(["batch", "--jobs", str(jobs_file)])

        assert exit_code == 0
        assert "No research jobs to run." in capsys.readouterr().out
