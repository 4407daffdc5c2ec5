from __future__ import annotations

import datetime as dt
import subprocess
from pathlib import Path

from .models import CommitChanges

END_COMMIT = "<END_COMMIT>"
LOG_FORMAT = f"%H%n%an%n%ad%n%s%n%b%n{END_COMMIT}"


class GitError(RuntimeError):
    pass


def run_git(args: list[str], cwd: Path) -> tuple[int, str, str]:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
        )
    except OSError as e:
        return 127, "", str(e)
    return proc.returncode, proc.stdout, proc.stderr


def _failure(args: list[str], code: int, err: str) -> str:
    msg = f"git {args[0]} exited {code}"
    detail = err.strip()[:500]
    if detail:
        msg += f": {detail}"
    return msg


def is_git_repo(path: Path) -> bool:
    return (path / ".git").exists()


def get_commit_log(repo: Path, since: dt.date, until: dt.date) -> str:
    """Raw `git log` output for commits in [since, until), one record per END_COMMIT marker."""
    args = [
        "log",
        f"--since={since.isoformat()}",
        f"--until={until.isoformat()}",
        f"--format={LOG_FORMAT}",
    ]
    code, out, err = run_git(args, cwd=repo)
    if code != 0:
        raise GitError(_failure(args, code, err))
    return out


def parse_shortstat(stats: str) -> tuple[int, int]:
    additions = 0
    deletions = 0
    for line in reversed(stats.splitlines()):
        if "insertion" not in line and "deletion" not in line:
            continue
        for part in line.split(", "):
            words = part.split()
            if not words or not words[0].isdigit():
                continue
            if "insertion" in part:
                additions = int(words[0])
            elif "deletion" in part:
                deletions = int(words[0])
        break
    return additions, deletions


def get_commit_changes(repo: Path, sha: str) -> tuple[CommitChanges, str]:
    """
    Changed files and diffstat totals for one commit.

    Returns the changes gathered so far and an error message ("" on success).
    A failed `--stat` query still returns the file list.
    """
    args = ["show", "--name-only", "--format=", sha]
    code, out, err = run_git(args, cwd=repo)
    if code != 0:
        return CommitChanges(), _failure(args, code, err)
    files = [f for f in out.strip().split("\n") if f]

    args = ["show", "--stat", "--format=", sha]
    code, out, err = run_git(args, cwd=repo)
    if code != 0:
        return CommitChanges(files=files), _failure(args, code, err)

    additions, deletions = parse_shortstat(out)
    return CommitChanges(files=files, additions=additions, deletions=deletions), ""
