from .accumulator import InputAccumulator, is_complete, is_complete_simple
from .classify import Category, classify
from .errors import GoReplError, UnsupportedDeclaration, WorkspaceError
from .runner import GoRunner, RunResult
from .session import Session, Submission

__version__ = "0.1.0"
