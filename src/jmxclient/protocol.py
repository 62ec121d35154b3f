"""JSON Schema validation for management agent responses

Responses of the HTTP/JSON bridge are checked against JSON Schema Draft-07
before the client looks inside them, so a proxy error page or an agent
speaking another protocol version surfaces as a ProtocolError instead of
a KeyError deep in the client.
"""

import json
from typing import Any, Dict

from jsonschema import Draft7Validator

from jmxclient.errors import ProtocolError


# Envelope of every response: success carries `value`, failure carries `error`
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["status"],
    "properties": {
        "status": {"type": "integer"},
        "error": {"type": "string"},
        "error_type": {"type": "string"},
        "stacktrace": {"type": "string"},
        "timestamp": {"type": "integer"},
        "request": {"type": "object"},
    },
    "if": {"properties": {"status": {"const": 200}}},
    "then": {"required": ["value"]},
    "else": {"required": ["error"]},
}

_PARAMETER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["type"],
    "properties": {
        "name": {"type": "string"},
        "type": {"type": "string"},
        "desc": {"type": ["string", "null"]},
    },
}

_OPERATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "args": {"type": "array", "items": _PARAMETER_SCHEMA},
        "ret": {"type": "string"},
        "desc": {"type": ["string", "null"]},
    },
}

# Value of a `list` response for a single bean
BEAN_INFO_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "desc": {"type": ["string", "null"]},
        "attr": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["type"],
                "properties": {
                    "type": {"type": "string"},
                    "desc": {"type": ["string", "null"]},
                    "rw": {"type": "boolean"},
                },
            },
        },
        "op": {
            "type": "object",
            "additionalProperties": {
                "oneOf": [
                    _OPERATION_SCHEMA,
                    {"type": "array", "items": _OPERATION_SCHEMA},
                ],
            },
        },
    },
}

# Value of a `search` response
SEARCH_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {"type": "string"},
}


class ResponseValidator:
    """Schema validator with caching of compiled schemas"""

    def __init__(self):
        self.schema_cache: Dict[str, Draft7Validator] = {}

    def _validator(self, schema: Dict[str, Any]) -> Draft7Validator:
        schema_key = json.dumps(schema, sort_keys=True)
        if schema_key not in self.schema_cache:
            Draft7Validator.check_schema(schema)
            self.schema_cache[schema_key] = Draft7Validator(schema)
        return self.schema_cache[schema_key]

    def validate(self, what: str, value: Any, schema: Dict[str, Any]) -> None:
        """Validate a decoded value against a schema

        Raises:
            ProtocolError: Listing every violation found
        """
        errors = sorted(self._validator(schema).iter_errors(value), key=lambda e: [str(p) for p in e.path])
        if errors:
            details = "\n".join(f"  - {e.message}" for e in errors)
            raise ProtocolError(f"Unexpected {what} from agent:\n{details}")

    def validate_response(self, response: Any) -> None:
        self.validate("response", response, RESPONSE_SCHEMA)

    def validate_bean_info(self, value: Any) -> None:
        self.validate("bean description", value, BEAN_INFO_SCHEMA)

    def validate_search(self, value: Any) -> None:
        self.validate("search result", value, SEARCH_SCHEMA)
