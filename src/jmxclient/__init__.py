"""jmxclient - command-line client for beans of a remote management agent

Resolves short `name` / `name=arg,...` commands against a bean's published
attributes and operations, coerces plain-text arguments to the declared
types, performs the call and renders composite and tabular results as
indented text.
"""

from jmxclient.errors import (
    JmxClientError,
    MalformedCommandError,
    FeatureNotFoundError,
    ArityMismatchError,
    UnsupportedTypeError,
    CoercionFailedError,
    MalformedObjectNameError,
    BeanNotFoundError,
    RemoteError,
    RemoteNotFoundError,
    RemoteTypeMismatchError,
    RemoteInvocationError,
    SessionError,
    ConnectionFailedError,
    AuthenticationError,
    ProtocolError,
    CredentialsError,
)

from jmxclient.command import ParsedCommand, parse_command
from jmxclient.object_name import ObjectName
from jmxclient.coerce import TypeConverterRegistry, coerce, coerce_attribute_value
from jmxclient.result import (
    Scalar,
    Record,
    Table,
    StringArray,
    StructuredResult,
    to_structured,
    flatten,
    render,
)
from jmxclient.bean import (
    BeanInfo,
    FeatureDescriptor,
    FeatureKind,
    ParameterDescriptor,
    FeatureResolver,
    resolve,
    AttributeGet,
    AttributeSet,
    OperationCall,
    ResolvedAction,
    Invoker,
    build_action,
    invoke,
    list_options,
)
from jmxclient.session import (
    ManagementSession,
    JolokiaSession,
    SessionConfig,
    connect,
    format_credentials,
)
from jmxclient.client import JmxClient

__version__ = "0.1.0"
