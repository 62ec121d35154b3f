"""Error taxonomy for the command-line management client

Every error raised by the client derives from JmxClientError. Errors raised
while processing a command batch carry the command text and the bean
reference they were raised for, so a failure can be diagnosed without
re-running the batch.
"""

from typing import Optional


class JmxClientError(Exception):
    """Base exception for client errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.command: Optional[str] = None
        self.bean: Optional[str] = None

    def add_context(self, command: Optional[str] = None, bean: Optional[str] = None) -> "JmxClientError":
        """Attach the command text and bean reference the error was raised for

        Context already present is kept, so the innermost caller wins.
        """
        if self.command is None:
            self.command = command
        if self.bean is None:
            self.bean = bean
        return self

    def __str__(self) -> str:
        parts = []
        if self.bean:
            parts.append(f"bean {self.bean}")
        if self.command:
            parts.append(f"command '{self.command}'")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


# =============================================================================
# COMMAND RESOLUTION ERRORS
# =============================================================================


class MalformedCommandError(JmxClientError):
    """Command token does not match the `name[=arg,...]` grammar"""

    def __init__(self, raw: str, reason: str):
        super().__init__(f"Failed parse of '{raw}': {reason}")
        self.raw = raw
        self.reason = reason


class ArityMismatchError(JmxClientError):
    """Wrong number of arguments for an attribute or operation"""

    def __init__(self, name: str, expected: int, actual: int):
        super().__init__(
            f"Passed param count does not match signature count for '{name}': "
            f"expected {expected}, got {actual}"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class UnsupportedTypeError(JmxClientError):
    """Declared type has no conversion from a string"""

    def __init__(self, type_name: str):
        super().__init__(f"No string conversion for type '{type_name}'")
        self.type_name = type_name


class CoercionFailedError(JmxClientError):
    """String is not a valid literal for the declared type"""

    def __init__(self, raw: str, type_name: str, details: str = ""):
        msg = f"Cannot convert '{raw}' to {type_name}"
        if details:
            msg += f": {details}"
        super().__init__(msg)
        self.raw = raw
        self.type_name = type_name
        self.details = details


class MalformedObjectNameError(JmxClientError):
    """Bean reference is not a valid object name"""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Malformed object name '{name}': {reason}")
        self.name = name
        self.reason = reason


class BeanNotFoundError(JmxClientError):
    """No registered bean matches the requested name"""

    def __init__(self, name: str):
        super().__init__(f"{name} not registered bean")
        self.name = name


# =============================================================================
# REMOTE ERRORS - surfaced from the agent
# =============================================================================


class RemoteError(JmxClientError):
    """Error status returned by the management agent"""

    def __init__(self, status: int, error_type: Optional[str], remote_message: str):
        label = error_type or "error"
        super().__init__(f"{label}: {remote_message} (status {status})")
        self.status = status
        self.error_type = error_type
        self.remote_message = remote_message


class RemoteNotFoundError(RemoteError):
    """Bean, attribute or operation unknown to the agent"""
    pass


class FeatureNotFoundError(RemoteNotFoundError):
    """Agent has no attribute or operation of the requested name on the bean"""
    pass


class RemoteTypeMismatchError(RemoteError):
    """Agent rejected a value for its type"""
    pass


class RemoteInvocationError(RemoteError):
    """Attribute access or operation failed inside the agent"""
    pass


# =============================================================================
# SESSION ERRORS
# =============================================================================


class SessionError(JmxClientError):
    """Base class for connection level failures"""
    pass


class ConnectionFailedError(SessionError):
    """Agent could not be reached"""
    pass


class AuthenticationError(SessionError):
    """Agent refused the supplied credentials"""
    pass


class ProtocolError(SessionError):
    """Agent answered with a payload the client does not understand"""
    pass


class CredentialsError(JmxClientError):
    """USER:PASS argument could not be parsed"""

    def __init__(self, userpass: str):
        super().__init__(f"Unable to parse: {userpass}")
        self.userpass = userpass
