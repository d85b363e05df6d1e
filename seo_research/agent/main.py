"""
Main entry point for the SEO Research Copilot.

This module provides the command-line interface: research a single keyword,
run a batch of keywords from a YAML job file, or print keyword variations.
"""

import argparse
import asyncio
import json
import logging
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from ..config.config_loader import ConfigurationError, load_research_jobs
from ..config.settings import Settings, get_settings
from ..generators.natural_language import generate_natural_language_variations
from ..generators.semantic_keywords import generate_semantic_keywords
from ..models.research import EnhancedResearchData
from ..utils.research_brief import format_research_brief
from .research_aggregator import ResearchAggregator

logger = structlog.get_logger(__name__)


class ResearchCliError(Exception):
    """Exception raised when a CLI command cannot complete."""

    pass


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Log level name
        fmt: ``json`` for machine-readable output, ``console`` otherwise
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def keyword_slug(keyword: str) -> str:
    """File-name friendly form of a keyword."""
    slug = re.sub(r"[^a-z0-9]+", "-", keyword.lower()).strip("-")
    return slug or "research"


def render_research(research_data: EnhancedResearchData, output_format: str) -> str:
    if output_format == "text":
        return format_research_brief(research_data)
    return json.dumps(research_data.to_payload(), indent=2, ensure_ascii=False)


class ResearchCLI:
    """
    Command-line interface for the SEO Research Copilot.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the CLI."""
        self.settings = settings
        self.aggregator: Optional[ResearchAggregator] = None

    async def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the CLI with the given arguments.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            int: Exit code
        """
        parser = self._create_parser()
        parsed_args = parser.parse_args(args)

        if not parsed_args.command:
            parser.print_help()
            return 1

        try:
            self.settings = self.settings or get_settings()
            monitoring = self.settings.monitoring
            debug = parsed_args.verbose or self.settings.debug
            configure_logging(
                "DEBUG" if debug else monitoring.log_level,
                monitoring.log_format,
            )

            if parsed_args.command == "research":
                return await self._execute_research(parsed_args)
            elif parsed_args.command == "batch":
                return await self._execute_batch(parsed_args)
            elif parsed_args.command == "keywords":
                return self._execute_keywords(parsed_args)
            else:
                logger.error("Unknown command", command=parsed_args.command)
                return 1

        except Exception as e:
            logger.error("CLI execution failed", error=str(e), exc_info=True)
            return 1

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create command line argument parser."""
        parser = argparse.ArgumentParser(
            prog="seo-research",
            description="SEO Research Copilot - Multi-source keyword research for content generation",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Research a keyword and print JSON
  seo-research research "vitamin d deficiency"

  # Research with Jina AI and write a text brief
  seo-research research "zinc absorption" --jina-key $JINA_API_KEY --format text --output brief.txt

  # Research every keyword in a job file
  seo-research batch --jobs jobs.yaml --output-dir research/

  # Show semantic keywords and natural variations
  seo-research keywords "make money online"
            """,
        )

        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose logging"
        )

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        research_parser = subparsers.add_parser("research", help="Research a keyword")
        research_parser.add_argument("keyword", help="Keyword to research")
        research_parser.add_argument(
            "--jina-key", help="Jina AI API key (default: JINA_API_KEY)"
        )
        research_parser.add_argument(
            "--perplexity-key", help="Perplexity API key (default: PERPLEXITY_API_KEY)"
        )
        research_parser.add_argument(
            "--format",
            "-f",
            choices=["json", "text"],
            default="json",
            help="Output format (default: json)",
        )
        research_parser.add_argument(
            "--output", "-o", help="Write output to this file instead of stdout"
        )

        batch_parser = subparsers.add_parser(
            "batch", help="Research every keyword in a YAML job file"
        )
        batch_parser.add_argument(
            "--jobs", "-j", required=True, help="Path to the YAML job file"
        )
        batch_parser.add_argument(
            "--output-dir",
            "-d",
            default="research-output",
            help="Directory for research output files (default: research-output)",
        )
        batch_parser.add_argument(
            "--include-disabled",
            action="store_true",
            help="Also run jobs marked enabled: false",
        )

        keywords_parser = subparsers.add_parser(
            "keywords", help="Show semantic keywords and natural variations"
        )
        keywords_parser.add_argument("keyword", help="Primary keyword")

        return parser

    def _get_aggregator(self) -> ResearchAggregator:
        if self.aggregator is None:
            self.aggregator = ResearchAggregator(settings=self.settings)
        return self.aggregator

    def _credentials(self, args: argparse.Namespace) -> Dict[str, Optional[str]]:
        return {
            "jina_api_key": getattr(args, "jina_key", None) or self.settings.jina.api_key,
            "perplexity_api_key": getattr(args, "perplexity_key", None)
            or self.settings.perplexity.api_key,
        }

    async def _execute_research(self, args: argparse.Namespace) -> int:
        """Execute research command."""
        research_data = await self._get_aggregator().research(
            args.keyword, **self._credentials(args)
        )
        output = render_research(research_data, args.format)

        if args.output:
            try:
                self._write_output(Path(args.output), output)
            except ResearchCliError as e:
                logger.error("Failed to write research output", error=str(e))
                return 1
            print(f"Research for '{research_data.keyword}' written to {args.output}")
        else:
            print(output)

        return 0

    async def _execute_batch(self, args: argparse.Namespace) -> int:
        """Execute batch command."""
        try:
            jobs = load_research_jobs(args.jobs, include_disabled=args.include_disabled)
        except ConfigurationError as e:
            logger.error("Failed to load research jobs", jobs_file=args.jobs, error=str(e))
            return 1

        if not jobs:
            print("No research jobs to run.")
            return 0

        output_dir = Path(args.output_dir)
        credentials = self._credentials(args)
        summary: List[Dict[str, Any]] = []
        failures = 0

        for job in jobs:
            research_data = await self._get_aggregator().research(job.keyword, **credentials)
            output_file = output_dir / (job.output_file or f"{keyword_slug(job.keyword)}.json")
            output_format = "text" if output_file.suffix == ".txt" else "json"

            try:
                self._write_output(output_file, render_research(research_data, output_format))
            except ResearchCliError as e:
                logger.error("Failed to write research output", keyword=job.keyword, error=str(e))
                failures += 1
                continue

            summary.append(
                {
                    "keyword": research_data.keyword,
                    "output": str(output_file),
                    "fallback": research_data.is_fallback,
                }
            )

        print("\n" + "=" * 60)
        print("BATCH RESEARCH COMPLETED")
        print("=" * 60)
        for entry in summary:
            marker = " (fallback)" if entry["fallback"] else ""
            print(f"{entry['keyword']}{marker} -> {entry['output']}")
        if failures:
            print(f"Failed: {failures}")
        print("=" * 60)

        return 0 if failures == 0 else 1

    def _execute_keywords(self, args: argparse.Namespace) -> int:
        """Execute keywords command."""
        print(f"Semantic keywords for '{args.keyword}':")
        for keyword in generate_semantic_keywords(args.keyword):
            print(f"  - {keyword}")

        print(f"\nNatural variations for '{args.keyword}':")
        for variation in generate_natural_language_variations(args.keyword):
            print(f"  - {variation}")

        return 0

    def _write_output(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ResearchCliError(f"Cannot write {path}: {e}") from e


def main():
    """Main entry point."""
    cli = ResearchCLI()
    exit_code = asyncio.run(cli.run())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
