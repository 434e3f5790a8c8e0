class GoReplError(Exception):
    """Base class for errors reported back at the prompt."""


class UnsupportedDeclaration(GoReplError):
    """A declaration whose variable name cannot be picked out of the text."""


class WorkspaceError(GoReplError):
    """The scratch directory for a run could not be created or written."""
