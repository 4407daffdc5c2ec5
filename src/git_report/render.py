from __future__ import annotations

import dataclasses
import datetime as dt
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, select_autoescape

from .models import Commit, Report, bounded_slice

TEMPLATE_NAME = "report.html"


class TemplateMissingError(FileNotFoundError):
    pass


class ReportRenderError(RuntimeError):
    pass


@dataclasses.dataclass(frozen=True)
class ReportView:
    company_name: str
    logo_path: str
    start_date: dt.date
    end_date: dt.date
    repo_path: str
    commits: list[Commit]
    generated_at: dt.datetime
    total_additions: int
    total_deletions: int
    files_changed: int
    authors: list[str]

    @property
    def total_commits(self) -> int:
        return len(self.commits)

    @property
    def total_changed(self) -> int:
        return self.total_additions + self.total_deletions


def build_view(report: Report) -> ReportView:
    authors: list[str] = []
    files: set[str] = set()
    for c in report.commits:
        if c.author not in authors:
            authors.append(c.author)
        files.update(c.files)
    return ReportView(
        company_name=report.company_name,
        logo_path=report.logo_path,
        start_date=report.start_date,
        end_date=report.end_date,
        repo_path=report.repo_path,
        commits=list(report.commits),
        generated_at=report.generated_at,
        total_additions=sum(c.additions for c in report.commits),
        total_deletions=sum(c.deletions for c in report.commits),
        files_changed=len(files),
        authors=authors,
    )


def make_environment(template_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
    )
    env.globals["slice"] = bounded_slice
    env.filters["bounded_slice"] = bounded_slice
    return env


def load_template(template_dir: Path) -> Template:
    """
    Load `report.html` from `template_dir`.

    A missing template is not replaced by a built-in default: the directory is
    created so the user knows where to put one, and TemplateMissingError is raised.
    """
    template_path = template_dir / TEMPLATE_NAME
    if not template_path.is_file():
        template_dir.mkdir(parents=True, exist_ok=True)
        raise TemplateMissingError(f"Template file not found. Please create '{template_path}' before running.")
    env = make_environment(template_dir)
    try:
        return env.get_template(TEMPLATE_NAME)
    except TemplateError as e:
        raise ReportRenderError(f"error parsing template: {e}") from e


def render_report(view: ReportView, template_dir: Path) -> str:
    template = load_template(template_dir)
    try:
        return template.render(report=view)
    except TemplateError as e:
        raise ReportRenderError(f"error rendering template: {e}") from e


def write_report(report: Report, output_path: Path, template_dir: Path) -> Path:
    html = render_report(build_view(report), template_dir)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path
