#!/usr/bin/env python3
"""Sample analysis harness for manual validation.

Runs both engine contracts (score_and_rank_jobs, compute_skill_gaps) over a
deterministic YAML fixture and prints summary tables, without pytest.

Usage:
    # Run with the bundled fixture
    python scripts/run_sample_analysis.py

    # Custom fixture, config and gap count
    python scripts/run_sample_analysis.py --fixture my_jobs.yaml --config skillgap.yaml --top-n 8

    # Emit the JSON payloads instead of tables
    python scripts/run_sample_analysis.py --json
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml
from dotenv import load_dotenv

from skillgap import SkillGapEngine, to_payload
from skillgap.config import ConfigurationError, load_config
from skillgap.domain import InvalidArgumentError
from skillgap.logging.config import configure_logging


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_table(headers, rows):
    """Print rows as a boxed table sized to its contents."""
    widths = [
        max(len(str(header)), *(len(str(row[i])) for row in rows)) if rows else len(str(header))
        for i, header in enumerate(headers)
    ]

    def line(left, mid, right):
        return left + mid.join("─" * (w + 2) for w in widths) + right

    print(line("┌", "┬", "┐"))
    print("│" + "│".join(f" {str(h):<{w}} " for h, w in zip(headers, widths)) + "│")
    print(line("├", "┼", "┤"))
    for row in rows:
        print("│" + "│".join(f" {str(c):<{w}} " for c, w in zip(row, widths)) + "│")
    print(line("└", "┴", "┘"))


def print_ranked_jobs(jobs):
    print_header("Ranked Jobs")
    rows = [
        (
            index + 1,
            job.title[:32],
            f"{job.relevance_score:g}",
            f"{job.match_count:g}",
            ", ".join(job.matched_skills)[:30],
            ", ".join(job.missing_skills)[:30],
        )
        for index, job in enumerate(jobs)
    ]
    print_table(["#", "Title", "Score", "Matches", "Matched", "Missing"], rows)


def print_skill_gaps(gaps):
    print_header("Skill Gaps")
    rows = [
        (gap.skill, gap.priority, f"{gap.importance:g}", f"{gap.frequency:g}")
        for gap in gaps
    ]
    print_table(["Skill", "Priority", "Importance", "Frequency"], rows)
    print()
    for gap in gaps:
        print(f"- {gap.skill}: {gap.reason}")


def main():
    """Main entry point for the sample analysis harness."""
    parser = argparse.ArgumentParser(
        description="Run the skill gap engine over a sample fixture",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--fixture",
        type=Path,
        default=Path("tests/fixtures/sample_analysis.yaml"),
        help="Fixture with candidateSkills and jobs (default: tests/fixtures/sample_analysis.yaml)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Engine configuration file (default: SKILLGAP_CONFIG, ./skillgap.yaml, or built-in defaults)",
    )
    parser.add_argument("--top-n", type=int, default=None, help="Number of skill gaps to report")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON payloads instead of tables")

    args = parser.parse_args()

    # Load environment variables
    load_dotenv()

    if not args.fixture.exists():
        print(f"\n❌ Error: Fixture file not found: {args.fixture}")
        return 1

    try:
        config = load_config(args.config)
        configure_logging(
            level=args.log_level,
            format_type=config.logging.format,
            environment="validation",
        )

        with open(args.fixture, "r") as f:
            fixture = yaml.safe_load(f) or {}

        candidate_skills = fixture.get("candidateSkills", [])
        engine = SkillGapEngine(config)
        result = engine.analyze(candidate_skills, fixture.get("jobs", []), args.top_n)
    except (ConfigurationError, InvalidArgumentError, yaml.YAMLError) as e:
        print(f"\n❌ Error: {e}")
        return 1

    if args.json:
        print(json.dumps(
            {"jobs": to_payload(result.jobs), "skillGaps": to_payload(result.gaps)},
            indent=2,
        ))
        return 0

    print_header("Skill Gap Engine - Sample Analysis")
    print(f"Fixture: {args.fixture}")
    print(f"Candidate skills: {', '.join(candidate_skills)}")
    print(f"Catalog: {engine.catalog!r}")

    print_ranked_jobs(result.jobs)
    print_skill_gaps(result.gaps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
