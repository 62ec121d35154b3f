"""Shared fixtures: an in-memory management session"""

from typing import Any, Dict, List, Optional

import pytest

from jmxclient.bean.feature import BeanInfo, FeatureDescriptor, ParameterDescriptor
from jmxclient.errors import FeatureNotFoundError, RemoteNotFoundError
from jmxclient.object_name import ObjectName
from jmxclient.session import ManagementSession


SERVICE_BEAN = "org.archive.crawler:name=Heritrix,type=Service"


class FakeSession(ManagementSession):
    """Session backed by dicts, recording every remote call"""

    def __init__(self):
        self.beans: Dict[str, BeanInfo] = {}
        self.values: Dict[str, Dict[str, Any]] = {}
        self.operations: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.closed = False

    def add_bean(self, name: str, info: BeanInfo, values=None, operations=None) -> None:
        canonical = ObjectName.from_string(name).canonical_name
        self.beans[canonical] = info
        self.values[canonical] = dict(values or {})
        self.operations[canonical] = dict(operations or {})

    def _key(self, bean) -> str:
        canonical = ObjectName.from_string(str(bean)).canonical_name
        if canonical not in self.beans:
            raise RemoteNotFoundError(404, "javax.management.InstanceNotFoundException", str(bean))
        return canonical

    def introspect(self, bean):
        self.calls.append(("introspect", str(bean)))
        return self.beans[self._key(bean)]

    def get_attribute(self, bean, name):
        self.calls.append(("get", name))
        values = self.values[self._key(bean)]
        if name not in values:
            raise FeatureNotFoundError(404, "javax.management.AttributeNotFoundException", name)
        return values[name]

    def set_attribute(self, bean, name, value):
        self.calls.append(("set", name, value))
        values = self.values[self._key(bean)]
        if name not in values:
            raise FeatureNotFoundError(404, "javax.management.AttributeNotFoundException", name)
        values[name] = value

    def invoke(self, bean, name, values, signature):
        self.calls.append(("invoke", name, list(values), None if signature is None else list(signature)))
        handler = self.operations[self._key(bean)].get(name)
        if handler is None:
            raise FeatureNotFoundError(404, "java.lang.NoSuchMethodException", name)
        return handler(*values)

    def query_beans(self, pattern: Optional[Any] = None):
        self.calls.append(("query", None if pattern is None else str(pattern)))
        names = sorted(ObjectName.from_string(n) for n in self.beans)
        if pattern is None:
            return names
        pattern = ObjectName.from_string(str(pattern))
        if not pattern.is_pattern:
            return [n for n in names if n == pattern]
        wanted = set(pattern.properties)
        return [
            n for n in names
            if (pattern.domain == "*" or n.domain == pattern.domain) and wanted <= set(n.properties)
        ]

    def close(self):
        self.closed = True


def heritrix_info() -> BeanInfo:
    return BeanInfo(
        description="Heritrix crawler service",
        attributes=[
            FeatureDescriptor.attribute("Status", "java.lang.String", "Crawler status"),
            FeatureDescriptor.attribute("MaxThreads", "int", "Maximum toe threads", writable=True),
            FeatureDescriptor.attribute("Memory", "javax.management.openmbean.CompositeData", "Heap usage"),
        ],
        operations=[
            FeatureDescriptor.operation(
                "schedule",
                [ParameterDescriptor("uri", "java.lang.String", "URI to schedule")],
                "java.lang.String",
                "Schedule a URI",
            ),
            FeatureDescriptor.operation("terminate", [], "void", "Stop the crawler"),
            FeatureDescriptor.operation(
                "setLoggerLevel",
                [
                    ParameterDescriptor("logger", "java.lang.String"),
                    ParameterDescriptor("level", "java.lang.String"),
                ],
                "void",
            ),
            FeatureDescriptor.operation(
                "addThreads",
                [ParameterDescriptor("count", "int", "Threads to add")],
                "int",
                "Add toe threads",
            ),
        ],
    )


@pytest.fixture
def session():
    fake = FakeSession()
    fake.add_bean(
        SERVICE_BEAN,
        heritrix_info(),
        values={
            "Status": "RUNNING",
            "MaxThreads": 50,
            "Memory": {"committed": 100, "used": 42},
        },
        operations={
            "schedule": lambda uri: f"scheduled {uri}",
            "terminate": lambda: None,
            "setLoggerLevel": lambda logger, level: None,
            "addThreads": lambda count: 50 + count,
        },
    )
    fake.add_bean("java.lang:type=Memory", BeanInfo())
    fake.add_bean("java.lang:type=Threading", BeanInfo())
    return fake
