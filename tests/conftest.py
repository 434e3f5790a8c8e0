import pytest

from gorepl.runner import RunResult


class FakeRunner:
    """Records every program it is asked to run and answers from a script."""

    def __init__(self, output="", ok=True):
        self.output = output
        self.ok = ok
        self.sources = []
        self.results = []

    def execute(self, source):
        self.sources.append(source)
        if self.results:
            result = self.results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return RunResult(self.output, self.ok)


@pytest.fixture
def fake_runner():
    return FakeRunner()
