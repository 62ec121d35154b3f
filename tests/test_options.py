"""Tests for attribute and operation listings"""

from jmxclient.bean.feature import FeatureDescriptor, ParameterDescriptor
from jmxclient.bean.options import list_options


def test_list_attributes_and_operations():
    attributes = [
        FeatureDescriptor.attribute("Status", "java.lang.String", "Crawler status"),
        FeatureDescriptor.attribute("MaxThreads", "int", "Maximum toe threads", writable=True),
    ]
    operations = [
        FeatureDescriptor.operation(
            "setLoggerLevel",
            [
                ParameterDescriptor("logger", "java.lang.String", "Logger name"),
                ParameterDescriptor("level", "java.lang.String", "Level name"),
            ],
            "void",
            "Set a logger's level",
        ),
        FeatureDescriptor.operation("uptime", [], "long", "Milliseconds since start"),
    ]

    assert list_options(attributes, operations) == (
        "Attributes:\n"
        " Status: Crawler status (type=java.lang.String)\n"
        " MaxThreads: Maximum toe threads (type=int)\n"
        "Operations:\n"
        " setLoggerLevel: Set a logger's level\n"
        "  Parameters 2, return type=void\n"
        "   name=logger type=java.lang.String Logger name\n"
        "   name=level type=java.lang.String Level name\n"
        " uptime: Milliseconds since start\n"
        "  Parameters 0, return type=long"
    )


def test_list_omits_empty_sections():
    only_ops = list_options([], [FeatureDescriptor.operation("gc", [], "void", "Run GC")])
    assert only_ops == "Operations:\n gc: Run GC\n  Parameters 0, return type=void"

    only_attrs = list_options([FeatureDescriptor.attribute("Verbose", "boolean", "")], [])
    assert only_attrs == "Attributes:\n Verbose:  (type=boolean)"


def test_list_nothing_for_featureless_bean():
    assert list_options([], []) == ""
