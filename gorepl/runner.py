"""Runs a synthesized Go program with the host toolchain.

A runner is anything with `execute(source) -> RunResult`. The REPL only
talks to that method, so tests can pass in a fake one.
"""
import os
import subprocess
import tempfile
from typing import NamedTuple

from .errors import WorkspaceError

SOURCE_FILENAME = "main.go"


class RunResult(NamedTuple):
    output: str
    ok: bool


class GoRunner:
    def __init__(self, go="go", timeout=None):
        self.go = go
        self.timeout = timeout

    def command(self, path):
        return [self.go, "run", path]

    def execute(self, source: str) -> RunResult:
        try:
            workspace = tempfile.TemporaryDirectory(prefix="gorepl")
        except OSError as e:
            raise WorkspaceError(f"Error creating temp dir: {e}")

        # removed on every path out, including a failed run
        with workspace as tmp_dir:
            path = os.path.join(tmp_dir, SOURCE_FILENAME)
            try:
                with open(path, "w", encoding="utf-8") as f:
                    f.write(source)
            except OSError as e:
                raise WorkspaceError(f"Error writing temp file: {e}")

            try:
                proc = subprocess.run(
                    self.command(path),
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.timeout,
                )
            except FileNotFoundError:
                return RunResult(f"{self.go}: command not found\n", False)
            except OSError as e:
                return RunResult(f"{self.go}: {e}\n", False)
            except subprocess.TimeoutExpired:
                return RunResult(f"timed out after {self.timeout}s\n", False)

        return RunResult(proc.stdout, proc.returncode == 0)
