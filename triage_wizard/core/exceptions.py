class ConfigError(Exception):
    """Raised when config loading or validation fails."""


class TriageError(Exception):
    """Base for failures surfaced to API callers as ``{error, category, details}``."""

    category = "internal"
    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class CallerInputError(TriageError):
    """Raised when a request is missing a prerequisite (prompt, schema, API key)."""

    category = "invalid_request"
    status_code = 400


class ProviderNotImplemented(TriageError):
    """Raised for provider/backend combinations that have no implementation."""

    category = "not_implemented"
    status_code = 501


class AgentUnavailable(TriageError):
    """Raised when the agent CLI cannot be started."""

    category = "agent_unavailable"
    status_code = 503


class AgentTransportError(TriageError):
    """Raised when writing to or reading from the agent process fails."""

    category = "agent_transport"
    status_code = 502


class AgentExitError(TriageError):
    """Raised when the agent process exits non-zero. ``details`` holds its stderr."""

    category = "agent_failed"
    status_code = 502

    def __init__(self, message: str, details: str | None = None, returncode: int | None = None):
        super().__init__(message, details)
        self.returncode = returncode


class AgentTimeoutError(TriageError):
    """Raised when the agent process exceeds the configured timeout and is killed."""

    category = "agent_timeout"
    status_code = 504


class ExtractionError(TriageError):
    """Raised when no structured answer can be found in the agent output."""

    category = "unparseable_output"
    status_code = 502
