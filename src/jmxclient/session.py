"""Remote management session

The client talks to the management agent through a Jolokia HTTP/JSON
bridge. Every call is one blocking POST of a JSON request; there is no
client-side retry. Configuration is read from (highest priority first):

1. Builder methods / explicit arguments
2. Environment variables (JMXCLIENT_AGENT_PATH, JMXCLIENT_SCHEME, JMXCLIENT_TIMEOUT)
3. Default values (http, /jolokia, no timeout)
"""

import logging
import math
import os
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import httpx

from jmxclient.bean.feature import BeanInfo
from jmxclient.errors import (
    AuthenticationError,
    ConnectionFailedError,
    CredentialsError,
    FeatureNotFoundError,
    ProtocolError,
    RemoteError,
    RemoteInvocationError,
    RemoteNotFoundError,
    RemoteTypeMismatchError,
)
from jmxclient.object_name import ObjectName
from jmxclient.protocol import ResponseValidator


logger = logging.getLogger(__name__)

DEFAULT_AGENT_PATH = "/jolokia"
DEFAULT_SCHEME = "http"

# Agent error types reported for an attribute or operation the bean does not have
FEATURE_NOT_FOUND_ERRORS = {
    "javax.management.AttributeNotFoundException",
    "java.lang.NoSuchMethodException",
}

# Agent error types reported when a value does not fit the declared type
TYPE_MISMATCH_ERRORS = {
    "javax.management.InvalidAttributeValueException",
    "java.lang.IllegalArgumentException",
    "java.lang.ClassCastException",
    "java.lang.NumberFormatException",
}

BeanRef = Union[ObjectName, str]


def format_credentials(userpass: Optional[str]) -> Optional[Tuple[str, str]]:
    """Split a `USER:PASS` argument into a (user, password) pair

    Returns None for None or `-` (no credentials).

    Raises:
        CredentialsError: If there is no colon, or nothing before it
    """
    if userpass is None or userpass == "-":
        return None
    index = userpass.find(":")
    if index <= 0:
        raise CredentialsError(userpass)
    return userpass[:index], userpass[index + 1:]


class SessionConfig:
    """Configuration for connecting to the agent"""

    def __init__(
        self,
        agent_path: Optional[str] = None,
        scheme: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        if agent_path is None:
            agent_path = os.getenv("JMXCLIENT_AGENT_PATH", DEFAULT_AGENT_PATH)
        if scheme is None:
            scheme = os.getenv("JMXCLIENT_SCHEME", DEFAULT_SCHEME)
        if timeout is None:
            timeout = _env_timeout()

        self.agent_path = agent_path
        self.scheme = scheme
        self.timeout = timeout

    def with_agent_path(self, path: str) -> "SessionConfig":
        self.agent_path = path
        return self

    def with_scheme(self, scheme: str) -> "SessionConfig":
        self.scheme = scheme
        return self

    def with_timeout(self, timeout: Optional[float]) -> "SessionConfig":
        """Set the per-request timeout in seconds (None blocks indefinitely)"""
        self.timeout = timeout
        return self

    def service_url(self, hostport: str) -> str:
        """URL of the agent listening on `host:port`"""
        path = "/" + self.agent_path.strip("/") if self.agent_path.strip("/") else ""
        return f"{self.scheme}://{hostport}{path}/"


def _env_timeout() -> Optional[float]:
    raw = os.getenv("JMXCLIENT_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring JMXCLIENT_TIMEOUT=%r: not a number", raw)
        return None


def _bean_name(bean: BeanRef) -> ObjectName:
    if isinstance(bean, ObjectName):
        return bean
    return ObjectName.from_string(bean)


def _escape_path(part: str) -> str:
    """Escape a path element of a `list` request"""
    return part.replace("!", "!!").replace("/", "!/")


def _to_wire(value: Any) -> Any:
    """JSON form of a coerced value"""
    if isinstance(value, (Decimal, ObjectName)):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    return value


def _remote_error(body: Dict[str, Any]) -> RemoteError:
    status = body["status"]
    error_type = body.get("error_type")
    message = body.get("error", "")
    # Jolokia reports an unknown operation as an IllegalArgumentException
    if error_type in FEATURE_NOT_FOUND_ERRORS or message.startswith("No operation "):
        return FeatureNotFoundError(status, error_type, message)
    if status == 404 or (error_type and "NotFound" in error_type):
        return RemoteNotFoundError(status, error_type, message)
    if error_type in TYPE_MISMATCH_ERRORS:
        return RemoteTypeMismatchError(status, error_type, message)
    return RemoteInvocationError(status, error_type, message)


class ManagementSession:
    """Interface to a management agent

    This is an abstract base class; `JolokiaSession` talks to a real agent.
    Sessions are context managers so the connection is closed however a
    command batch ends.
    """

    def introspect(self, bean: BeanRef) -> BeanInfo:
        """Fetch the attribute and operation catalog of a bean"""
        raise NotImplementedError("ManagementSession.introspect must be implemented by subclasses")

    def get_attribute(self, bean: BeanRef, name: str) -> Any:
        raise NotImplementedError("ManagementSession.get_attribute must be implemented by subclasses")

    def set_attribute(self, bean: BeanRef, name: str, value: Any) -> None:
        raise NotImplementedError("ManagementSession.set_attribute must be implemented by subclasses")

    def invoke(
        self,
        bean: BeanRef,
        name: str,
        values: Sequence[Any],
        signature: Optional[Sequence[str]],
    ) -> Any:
        """Invoke an operation

        Args:
            bean: Target bean
            name: Operation name
            values: Coerced argument values
            signature: Declared parameter type names, or None for an
                operation the bean's description does not list
        """
        raise NotImplementedError("ManagementSession.invoke must be implemented by subclasses")

    def query_beans(self, pattern: Optional[BeanRef] = None) -> List[ObjectName]:
        """Names of the registered beans matching a name or pattern (all if None)"""
        raise NotImplementedError("ManagementSession.query_beans must be implemented by subclasses")

    def close(self) -> None:
        pass

    def __enter__(self) -> "ManagementSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class JolokiaSession(ManagementSession):
    """Session speaking the Jolokia protocol over HTTP"""

    def __init__(
        self,
        url: str,
        auth: Optional[Tuple[str, str]] = None,
        config: Optional[SessionConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Create a session

        Args:
            url: Agent URL, e.g. http://localhost:8778/jolokia/
            auth: Optional (user, password) for HTTP basic authentication
            config: Session configuration (defaults from environment)
            client: Optional preconfigured httpx client, closed with the session
        """
        self.url = url
        self.config = config or SessionConfig()
        self.client = client or httpx.Client(auth=auth, timeout=self.config.timeout)
        self.validator = ResponseValidator()

    def _request(self, payload: Dict[str, Any]) -> Any:
        """Send one request and return the `value` of a successful response"""
        logger.debug("-> %s", payload)
        try:
            response = self.client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise ConnectionFailedError(f"Failed to reach agent at {self.url}: {e}")

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Agent at {self.url} refused credentials (HTTP {response.status_code})"
            )

        try:
            body = response.json()
        except ValueError:
            raise ProtocolError(
                f"Agent at {self.url} answered HTTP {response.status_code} without a JSON body"
            )

        self.validator.validate_response(body)
        logger.debug("<- status %s", body["status"])
        if body["status"] != 200:
            raise _remote_error(body)
        return body["value"]

    def version(self) -> Dict[str, Any]:
        """Agent and protocol version; also checks reachability and credentials"""
        return self._request({"type": "version"})

    def introspect(self, bean: BeanRef) -> BeanInfo:
        name = _bean_name(bean)
        path = f"{_escape_path(name.domain)}/{_escape_path(name.canonical_key_property_string)}"
        value = self._request({"type": "list", "path": path})
        self.validator.validate_bean_info(value)
        return BeanInfo.from_dict(value)

    def get_attribute(self, bean: BeanRef, name: str) -> Any:
        return self._request({
            "type": "read",
            "mbean": str(bean),
            "attribute": name,
        })

    def set_attribute(self, bean: BeanRef, name: str, value: Any) -> None:
        self._request({
            "type": "write",
            "mbean": str(bean),
            "attribute": name,
            "value": _to_wire(value),
        })

    def invoke(
        self,
        bean: BeanRef,
        name: str,
        values: Sequence[Any],
        signature: Optional[Sequence[str]],
    ) -> Any:
        # Without a signature the agent picks the operation by name alone
        operation = name if signature is None else f"{name}({','.join(signature)})"
        return self._request({
            "type": "exec",
            "mbean": str(bean),
            "operation": operation,
            "arguments": [_to_wire(v) for v in values],
        })

    def query_beans(self, pattern: Optional[BeanRef] = None) -> List[ObjectName]:
        mbean = str(pattern) if pattern is not None else ObjectName.wildcard().to_string()
        value = self._request({"type": "search", "mbean": mbean})
        self.validator.validate_search(value)
        return sorted(ObjectName.from_string(n) for n in value)

    def close(self) -> None:
        self.client.close()


def connect(
    url: str,
    credentials: Optional[Tuple[str, str]] = None,
    config: Optional[SessionConfig] = None,
) -> JolokiaSession:
    """Open a session to the agent at `url`

    A version request is sent straight away so unreachable agents and
    rejected credentials fail here rather than on the first command.

    Raises:
        ConnectionFailedError: If the agent cannot be reached
        AuthenticationError: If the agent refuses the credentials
        ProtocolError: If the agent does not answer with Jolokia responses
    """
    session = JolokiaSession(url, auth=credentials, config=config)
    try:
        info = session.version()
    except Exception:
        session.close()
        raise
    logger.debug("Connected to %s (agent %s)", url, info.get("agent") if isinstance(info, dict) else info)
    return session
