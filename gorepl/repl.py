#!/usr/bin/env python3
import argparse
import readline  # noqa: F401  line editing for input()
import sys
from dataclasses import dataclass
from typing import Optional

from tabulate import tabulate  # type: ignore

from .accumulator import COMPLETENESS_CHECKS, EXIT, READY, InputAccumulator
from .errors import GoReplError, WorkspaceError
from .runner import GoRunner
from .session import Session

BANNER = """
 ---------------------------------------
|==Golang Interactive Code Environment==|
 ---------------------------------------

Go REPL (blank line to submit, Ctrl+D or 'exit' to quit, '.help' for commands)
"""
GOODBYE = "\nGoodbye!"


@dataclass
class ReplConfig:
    go: str = "go"
    completeness: str = "full"
    layout: str = "split"
    static_imports: bool = False
    rollback_on_error: bool = False
    timeout: Optional[float] = None
    verbose: bool = False


def stream_reader(stream, out=sys.stdout, echo=False):
    """Line source over a file object, raising EOFError like input()."""
    def read_line(prompt):
        line = stream.readline()
        if not line:
            raise EOFError
        line = line.rstrip("\r\n")
        if echo:
            print(f"{prompt}{line}", file=out)
        else:
            print(prompt, end="", file=out)
        return line
    return read_line


class GoRepl:
    def __init__(self, config=None, runner=None, out=sys.stdout, err=sys.stderr):
        self.config = config or ReplConfig()
        self.session = Session(self.config.layout, self.config.static_imports)
        self.accumulator = InputAccumulator(COMPLETENESS_CHECKS[self.config.completeness])
        self.runner = runner or GoRunner(self.config.go, self.config.timeout)
        self.out = out
        self.err = err
        self.commands = {
            ".help": self.show_help,
            ".stores": self.show_stores,
            ".source": self.show_source,
            ".reset": self.reset,
        }

    # --- meta commands ---
    def show_help(self):
        print("exit      leave the REPL", file=self.out)
        print(".stores   list accepted declarations", file=self.out)
        print(".source   print the last generated program", file=self.out)
        print(".reset    forget all declarations", file=self.out)

    def show_stores(self):
        rows = []
        for name, fragments in self.session.stores.items():
            for i, fragment in enumerate(fragments, 1):
                rows.append((name, i, fragment))
        if not rows:
            print("(no declarations)", file=self.out)
            return
        print(tabulate(rows, headers=["store", "#", "fragment"], tablefmt="psql"), file=self.out)

    def show_source(self):
        if self.session.last_source is None:
            print("(nothing submitted yet)", file=self.out)
        else:
            print(self.session.last_source, end="", file=self.out)

    def reset(self):
        self.session.reset()
        self.accumulator.clear()
        print("Session reset.", file=self.out)

    # --- evaluation ---
    def handle_line(self, line):
        """Feed one input line; returns the accumulator's result kind."""
        if self.accumulator.empty and line.strip() in self.commands:
            self.commands[line.strip()]()
            return None

        result = self.accumulator.accept_line(line)
        if result.kind == READY:
            self.evaluate(result.text)
        return result.kind

    def evaluate(self, fragment):
        try:
            submission = self.session.submit(fragment)
        except GoReplError as e:
            print(e, file=self.err)
            return False

        if self.config.verbose:
            print(f"--- {submission.category.value} ---", file=self.err)
            print(submission.source, file=self.err)

        try:
            result = self.runner.execute(submission.source)
        except WorkspaceError as e:
            print(e, file=self.err)
            self._discard_failed()
            return False

        if not result.ok:
            print(f"Execution error: {result.output.rstrip()}", file=self.err)
            self._discard_failed()
            return False

        print(result.output, end="", file=self.out)
        return True

    def _discard_failed(self):
        if self.config.rollback_on_error:
            self.session.rollback()

    # --- loops ---
    def run(self, read_line=input):
        print(BANNER, file=self.out)
        while True:
            try:
                line = read_line(self.accumulator.prompt)
            except EOFError:
                print(GOODBYE, file=self.out)
                return 0
            except KeyboardInterrupt:
                print(file=self.out)
                self.accumulator.clear()
                continue
            except (OSError, UnicodeDecodeError) as e:
                print(f"Error reading input: {e}", file=self.err)
                return 1

            if self.handle_line(line) == EXIT:
                print(GOODBYE, file=self.out)
                return 0

    def run_script(self, file_path):
        print(f"Running file '{file_path}'...", file=self.out)
        try:
            with open(file_path, encoding="utf-8") as f:
                read_line = stream_reader(f, self.out, echo=True)
                while True:
                    try:
                        line = read_line(self.accumulator.prompt)
                    except EOFError:
                        break
                    if self.handle_line(line) == EXIT:
                        break
        except FileNotFoundError:
            print(f"Error: File not found at '{file_path}'", file=self.err)
            return 1
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading file '{file_path}': {e}", file=self.err)
            return 1

        rest = self.accumulator.flush()
        if rest is not None:
            self.evaluate(rest.text)
        print(f"Finished running file '{file_path}'.", file=self.out)
        return 0


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Interactive Go REPL")
    parser.add_argument("script", nargs="?", help="file of Go fragments to run line by line")
    parser.add_argument("--go", default="go", help="Go toolchain binary (default: go)")
    parser.add_argument("--completeness", choices=sorted(COMPLETENESS_CHECKS), default="full",
                        help="rule set deciding when buffered lines are submitted")
    parser.add_argument("--layout", choices=["split", "merged"], default="split",
                        help="declaration stores: split package/local vars or one vars store")
    parser.add_argument("--static-imports", action="store_true",
                        help="always import fmt only instead of detecting imports")
    parser.add_argument("--rollback-on-error", action="store_true",
                        help="forget a fragment whose program failed to run")
    parser.add_argument("--timeout", type=float, default=None,
                        help="seconds before a run is killed (default: no limit)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="print each generated program to stderr")
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    config = ReplConfig(
        go=args.go,
        completeness=args.completeness,
        layout=args.layout,
        static_imports=args.static_imports,
        rollback_on_error=args.rollback_on_error,
        timeout=args.timeout,
        verbose=args.verbose,
    )
    repl = GoRepl(config)
    if args.script:
        return repl.run_script(args.script)
    return repl.run()


if __name__ == "__main__":
    sys.exit(main())
