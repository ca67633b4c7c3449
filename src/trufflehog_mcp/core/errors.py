"""Exception types for scan operations."""


class ScannerError(Exception):
    """Base exception for expected scan operation failures.

    Every subclass is converted into a textual tool result at the
    operation boundary instead of surfacing as a protocol error.
    """

    pass


class ValidationError(ScannerError):
    """A required request field is missing or malformed."""

    pass


class EngineUnavailableError(ScannerError):
    """The trufflehog binary could not be found or run."""

    def __init__(self, message: str = "TruffleHog CLI is not installed. Please install it first."):
        super().__init__(message)


class ExecutionFailureError(ScannerError):
    """The engine exited non-zero with diagnostics and no results.

    Attributes:
        stderr: Raw standard error text from the engine.
        exit_code: The process exit code.
    """

    def __init__(self, message: str, stderr: str, exit_code: int):
        super().__init__(message)
        self.stderr = stderr
        self.exit_code = exit_code


class ToolExecutionError(Exception):
    """Unexpected failure while dispatching a tool call.

    Raised out of the dispatcher so the MCP server reports the call
    with its error flag set.
    """

    pass
