from __future__ import annotations

import dataclasses
import datetime as dt
from pathlib import Path
from typing import Callable

from .git import END_COMMIT, get_commit_changes
from .models import Commit, CommitChanges

DATE_FORMATS = (
    "%a %b %d %H:%M:%S %Y %z",
    "%a %b %d %H:%M:%S %Y",
)

ChangesLookup = Callable[[Path, str], tuple[CommitChanges, str]]


@dataclasses.dataclass(frozen=True)
class LogRecord:
    hash: str
    author: str
    date_raw: str
    subject: str
    body: str


def split_log_records(output: str) -> list[LogRecord]:
    """
    Split `git log` output into records on the END_COMMIT marker.

    Each record is hash, author, date, subject (one line each) followed by an
    optional multi-line body. Chunks with fewer than four lines are dropped.
    """
    records: list[LogRecord] = []
    for chunk in output.split(END_COMMIT):
        chunk = chunk.strip()
        if not chunk:
            continue
        lines = chunk.split("\n")
        if len(lines) < 4:
            continue
        body = "\n".join(lines[4:]).strip() if len(lines) > 4 else ""
        records.append(
            LogRecord(
                hash=lines[0],
                author=lines[1],
                date_raw=lines[2],
                subject=lines[3],
                body=body,
            )
        )
    return records


def parse_commit_date(raw: str) -> dt.datetime | None:
    s = (raw or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None


def collect_commits(
    repo: Path,
    output: str,
    *,
    changes_lookup: ChangesLookup = get_commit_changes,
) -> tuple[list[Commit], list[str]]:
    commits: list[Commit] = []
    warnings: list[str] = []
    for rec in split_log_records(output):
        date = parse_commit_date(rec.date_raw)
        if date is None:
            warnings.append(f"Could not parse date '{rec.date_raw}' for commit {rec.hash}")
            continue

        changes, err = changes_lookup(repo, rec.hash)
        if err:
            warnings.append(f"Could not get changes for commit {rec.hash}: {err}")
            changes = CommitChanges(files=changes.files)

        commits.append(
            Commit(
                hash=rec.hash,
                author=rec.author,
                date=date,
                subject=rec.subject,
                body=rec.body,
                files=tuple(changes.files),
                additions=changes.additions,
                deletions=changes.deletions,
            )
        )
    return commits, warnings
