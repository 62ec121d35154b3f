"""Bean introspection, resolution and invocation"""

from jmxclient.bean.feature import (
    VOID_TYPE,
    BeanInfo,
    FeatureDescriptor,
    FeatureKind,
    ParameterDescriptor,
)
from jmxclient.bean.resolver import FeatureResolver, guess_kind, resolve
from jmxclient.bean.invoker import (
    AttributeGet,
    AttributeSet,
    Invoker,
    OperationCall,
    ResolvedAction,
    build_action,
    invoke,
)
from jmxclient.bean.options import list_options

__all__ = [
    "VOID_TYPE",
    "BeanInfo",
    "FeatureDescriptor",
    "FeatureKind",
    "ParameterDescriptor",
    "FeatureResolver",
    "guess_kind",
    "resolve",
    "AttributeGet",
    "AttributeSet",
    "Invoker",
    "OperationCall",
    "ResolvedAction",
    "build_action",
    "invoke",
    "list_options",
]
