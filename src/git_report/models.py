from __future__ import annotations

import dataclasses
import datetime as dt


def bounded_slice(s: str, i: int, j: int) -> str:
    if i >= len(s):
        return ""
    if j > len(s):
        j = len(s)
    return s[i:j]


@dataclasses.dataclass
class CommitChanges:
    files: list[str] = dataclasses.field(default_factory=list)
    additions: int = 0
    deletions: int = 0


@dataclasses.dataclass(frozen=True)
class Commit:
    hash: str
    author: str
    date: dt.datetime
    subject: str
    body: str = ""
    files: tuple[str, ...] = ()
    additions: int = 0
    deletions: int = 0

    @property
    def short_hash(self) -> str:
        return bounded_slice(self.hash, 0, 7)

    @property
    def changed(self) -> int:
        return self.additions + self.deletions


@dataclasses.dataclass
class Report:
    company_name: str
    logo_path: str
    start_date: dt.date
    end_date: dt.date  # inclusive
    repo_path: str
    commits: list[Commit]
    generated_at: dt.datetime
