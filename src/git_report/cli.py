from __future__ import annotations

import argparse
import datetime as dt
import sys
from pathlib import Path

from .config import CONFIG_KEYS, config_str, load_config
from .git import GitError, get_commit_log, is_git_repo
from .log_parser import collect_commits
from .models import Report
from .periods import default_output_name, parse_date_range
from .render import ReportRenderError, TemplateMissingError, write_report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="git-report", description="Generate an HTML commit report for a date range.")
    parser.add_argument("--start", type=str, default="", help="Start date (YYYY-MM-DD).")
    parser.add_argument("--end", type=str, default="", help="End date (YYYY-MM-DD), inclusive.")
    parser.add_argument("--repo", type=str, default=None, help="Path to the git repository (default: .).")
    parser.add_argument("--logo", type=str, default=None, help="Path to company logo.")
    parser.add_argument("--company", type=str, default=None, help="Name of the company (default: Company).")
    parser.add_argument(
        "--output",
        type=str,
        default="",
        help="Output HTML file path (default: YYYY-MM-DD-COMPANY-report.html).",
    )
    parser.add_argument("--templates", type=str, default=None, help="Directory containing report.html (default: templates).")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json with default values.")
    return parser


def _resolve(flag: str | None, config: dict, key: str, default: str) -> str:
    if flag is not None:
        return flag
    return config_str(config, key, default)


def run_report(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except ValueError as e:
        raise SystemExit(str(e)) from None
    unknown = sorted(k for k in config if k not in CONFIG_KEYS)
    if unknown:
        print(f"Note: ignoring unknown config keys: {', '.join(unknown)}", file=sys.stderr)

    try:
        date_range = parse_date_range(args.start, args.end)
    except ValueError as e:
        raise SystemExit(f"Error parsing dates: {e}") from None

    company = _resolve(args.company, config, "company", "Company")
    logo = _resolve(args.logo, config, "logo", "")
    repo = Path(_resolve(args.repo, config, "repo", ".")).resolve()
    template_dir = Path(_resolve(args.templates, config, "template_dir", "templates"))

    if not is_git_repo(repo):
        raise SystemExit(f"Error: {repo} is not a git repository")

    print(f"Reading commits in {repo} ({date_range.start.isoformat()} -> {date_range.end.isoformat()}, {date_range.days} days)...")
    try:
        log_output = get_commit_log(repo, date_range.start, date_range.until)
    except GitError as e:
        raise SystemExit(f"Error retrieving commits: {e}") from None

    commits, warnings = collect_commits(repo, log_output)
    for w in warnings:
        print(f"Warning: {w}", file=sys.stderr)
    print(f"Found {len(commits)} commits.")

    report = Report(
        company_name=company,
        logo_path=logo,
        start_date=date_range.start,
        end_date=date_range.end,
        repo_path=str(repo),
        commits=commits,
        generated_at=dt.datetime.now(),
    )

    output = Path(args.output or default_output_name(date_range.end, company))
    try:
        write_report(report, output, template_dir)
    except TemplateMissingError as e:
        raise SystemExit(str(e)) from None
    except (ReportRenderError, OSError) as e:
        raise SystemExit(f"Error generating HTML report: {e}") from None

    print(f"Report generated successfully: {output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.start or not args.end:
        print("Error: Start and end dates are required", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    return run_report(args)


if __name__ == "__main__":
    raise SystemExit(main())
