from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

FAKE_GIT = """#!/usr/bin/env python3
import json
import sys

DATA_PATH = {data_path!r}


def main() -> int:
    with open(DATA_PATH, encoding="utf-8") as f:
        data = json.load(f)
    args = sys.argv[1:]
    with open(data["calls_path"], "a", encoding="utf-8") as f:
        f.write(json.dumps(args) + "\\n")
    if args and args[0] == "log":
        if data.get("log_code", 0):
            sys.stderr.write("fatal: bad revision\\n")
            return data["log_code"]
        sys.stdout.write(data.get("log", ""))
        return 0
    if args and args[0] == "show":
        sha = args[-1]
        entry = data.get("show", {{}}).get(sha)
        kind = "name-only" if "--name-only" in args else "stat"
        if entry is None or entry.get(kind + "_code", 0):
            sys.stderr.write("fatal: bad object " + sha + "\\n")
            return 128
        sys.stdout.write(entry.get(kind, ""))
        return 0
    sys.stderr.write("unexpected args: " + " ".join(args) + "\\n")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
"""


class FakeGit:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.data_path = root / "fake_git.json"
        self.calls_path = root / "fake_git_calls.jsonl"
        self.data: dict = {"log": "", "log_code": 0, "show": {}, "calls_path": str(self.calls_path)}
        self._save()

    def _save(self) -> None:
        self.data_path.write_text(json.dumps(self.data), encoding="utf-8")

    def set_log(self, output: str, *, code: int = 0) -> None:
        self.data["log"] = output
        self.data["log_code"] = code
        self._save()

    def set_show(self, sha: str, *, files: list[str], stat: str, name_only_code: int = 0, stat_code: int = 0) -> None:
        self.data["show"][sha] = {
            "name-only": "\n" + "\n".join(files) + "\n",
            "stat": stat,
            "name-only_code": name_only_code,
            "stat_code": stat_code,
        }
        self._save()

    def calls(self) -> list[list[str]]:
        if not self.calls_path.exists():
            return []
        return [json.loads(line) for line in self.calls_path.read_text(encoding="utf-8").splitlines() if line.strip()]


@pytest.fixture
def fake_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    fake = FakeGit(tmp_path)
    script = bin_dir / "git"
    script.write_text(FAKE_GIT.format(data_path=str(fake.data_path)), encoding="utf-8")
    script.chmod(0o755)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    return fake
