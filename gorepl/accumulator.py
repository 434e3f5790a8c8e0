"""Line buffer for the Go REPL.

Collects raw input lines until the buffered text looks like a complete Go
fragment. The check is a brace/parenthesis heuristic, not a parser: a blank
line always forces submission of whatever is buffered.
"""
from typing import Callable, List, NamedTuple, Optional

PRIMARY_PROMPT = "go> "
CONTINUATION_PROMPT = "... "
EXIT_COMMAND = "exit"

# LineResult.kind
PENDING = "pending"
READY = "ready"
EXIT = "exit"


class LineResult(NamedTuple):
    kind: str
    text: Optional[str] = None


def is_complete(code: str) -> bool:
    code = code.strip()
    if not code:
        return False

    open_braces = code.count("{")
    close_braces = code.count("}")
    open_parens = code.count("(")
    close_parens = code.count(")")

    # if/for conditions can hold anything, only the block matters
    if code.startswith("if ") or code.startswith("for "):
        return open_braces == close_braces

    if "struct{" in code or "struct {" in code:
        return open_braces == close_braces

    # slice/array literal split over lines
    if "[" in code:
        last_line = code.split("\n")[-1].strip()
        if not last_line.endswith(",") and not last_line.endswith("]"):
            return False

    if (open_braces == 0 and open_parens == close_parens
            and not code.endswith("{") and not code.endswith(",")):
        return True

    return open_braces == close_braces and open_parens == close_parens


def is_complete_simple(code: str) -> bool:
    """Braces only: no block and no dangling `{`/`,` means done."""
    code = code.strip()
    if not code:
        return False
    open_braces = code.count("{")
    if open_braces == 0 and not code.endswith("{") and not code.endswith(","):
        return True
    return open_braces == code.count("}")


COMPLETENESS_CHECKS = {
    "full": is_complete,
    "simple": is_complete_simple,
}


class InputAccumulator:
    """Buffers lines and hands out fragments once they are complete."""

    def __init__(self, check: Callable[[str], bool] = is_complete):
        self.check = check
        self.lines: List[str] = []

    @property
    def prompt(self) -> str:
        return PRIMARY_PROMPT if not self.lines else CONTINUATION_PROMPT

    @property
    def empty(self) -> bool:
        return not self.lines

    def clear(self):
        self.lines = []

    def accept_line(self, line: str) -> LineResult:
        if not self.lines and line == EXIT_COMMAND:
            return LineResult(EXIT)

        if line == "":
            # explicit submit; the blank line itself is not part of the fragment
            return self._take() or LineResult(PENDING)

        self.lines.append(line)
        if self.check("\n".join(self.lines)):
            return self._take()
        return LineResult(PENDING)

    def flush(self) -> Optional[LineResult]:
        """Submit whatever is left, used at end of a script."""
        return self._take()

    def _take(self) -> Optional[LineResult]:
        text = "\n".join(self.lines)
        self.lines = []
        if not text.strip():
            return None
        return LineResult(READY, text)
