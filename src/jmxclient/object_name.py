"""Object names - references to beans registered with a management agent

Format: `<domain>:<key>=<value>[,<key>=<value>]*[,*]`

Examples:
- `java.lang:type=Memory`
- `java.util.logging:type=Logging`
- `org.archive.crawler:name=Heritrix,type=Service`
- `java.lang:type=GarbageCollector,*` (property pattern)
- `*:*` (every bean)

Values may be quoted (`"..."`), in which case `,`, `=`, `:` and escaped
characters are allowed inside them. The canonical form lists properties
sorted by key, which is how agents report bean names.
"""

from typing import List, Optional, Tuple

from jmxclient.errors import MalformedObjectNameError


# Characters never allowed in a property key
_KEY_ILLEGAL = set(':,=*?"\n')
# Characters never allowed in an unquoted property value
_VALUE_ILLEGAL = set(':,="\n')
# Wildcards that turn a domain or a value into a pattern
_WILDCARDS = set("*?")


class ObjectName:
    """Parsed bean reference

    Properties keep their declaration order; `canonical_name` sorts them.
    """

    def __init__(
        self,
        domain: str,
        properties: List[Tuple[str, str]],
        property_pattern: bool = False,
    ):
        self.domain = domain
        self.properties = list(properties)
        self.property_pattern = property_pattern

    @classmethod
    def from_string(cls, name: str) -> "ObjectName":
        """Parse an object name

        Raises:
            MalformedObjectNameError: If the name is not well formed
        """
        if name is None:
            raise MalformedObjectNameError("None", "name is required")

        colon = name.find(":")
        if colon < 0:
            raise MalformedObjectNameError(name, "domain part must be followed by ':'")

        domain = name[:colon]
        if "\n" in domain:
            raise MalformedObjectNameError(name, "domain contains a newline")

        properties, property_pattern = _parse_key_properties(name, name[colon + 1:])
        if not properties and not property_pattern:
            raise MalformedObjectNameError(name, "key properties cannot be empty")

        return cls(domain, properties, property_pattern)

    @classmethod
    def wildcard(cls) -> "ObjectName":
        """Pattern that matches every registered bean"""
        return cls("*", [], property_pattern=True)

    def get_key_property(self, key: str) -> Optional[str]:
        for k, v in self.properties:
            if k == key:
                return v
        return None

    @property
    def key_property_string(self) -> str:
        """Properties in declaration order, without pattern marker"""
        return ",".join(f"{k}={v}" for k, v in self.properties)

    @property
    def canonical_key_property_string(self) -> str:
        """Properties sorted by key, without pattern marker"""
        return ",".join(f"{k}={v}" for k, v in sorted(self.properties))

    @property
    def canonical_name(self) -> str:
        """Domain and key properties sorted by key, with `,*` for property patterns"""
        props = self.canonical_key_property_string
        if self.property_pattern:
            props = f"{props},*" if props else "*"
        return f"{self.domain}:{props}"

    @property
    def is_domain_pattern(self) -> bool:
        return any(c in _WILDCARDS for c in self.domain)

    @property
    def is_property_value_pattern(self) -> bool:
        return any(
            not _is_quoted(v) and any(c in _WILDCARDS for c in v)
            for _, v in self.properties
        )

    @property
    def is_pattern(self) -> bool:
        """True if the name may match more than one bean"""
        return self.is_domain_pattern or self.property_pattern or self.is_property_value_pattern

    def to_string(self) -> str:
        props = self.key_property_string
        if self.property_pattern:
            props = f"{props},*" if props else "*"
        return f"{self.domain}:{props}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ObjectName({self.canonical_name!r})"

    def __eq__(self, other):
        if not isinstance(other, ObjectName):
            return False
        return self.canonical_name == other.canonical_name

    def __hash__(self):
        return hash(self.canonical_name)

    def __lt__(self, other: "ObjectName") -> bool:
        return self.canonical_name < other.canonical_name


def _is_quoted(value: str) -> bool:
    return len(value) >= 2 and value[0] == '"' and value[-1] == '"'


def _parse_key_properties(name: str, text: str) -> Tuple[List[Tuple[str, str]], bool]:
    """Parse the part after the colon into (key, value) pairs

    Returns:
        Tuple of (properties, property_pattern)
    """
    properties: List[Tuple[str, str]] = []
    seen = set()
    property_pattern = False
    pos = 0
    length = len(text)

    if length == 0:
        return properties, False

    while pos <= length:
        if text.startswith("*", pos) and (pos + 1 == length or text[pos + 1] == ","):
            if property_pattern:
                raise MalformedObjectNameError(name, "property pattern given twice")
            property_pattern = True
            pos += 2
            continue

        eq = text.find("=", pos)
        if eq < 0:
            raise MalformedObjectNameError(name, f"key property '{text[pos:]}' has no '='")
        key = text[pos:eq]
        if not key:
            raise MalformedObjectNameError(name, "empty key")
        if any(c in _KEY_ILLEGAL for c in key):
            raise MalformedObjectNameError(name, f"invalid character in key '{key}'")
        if key in seen:
            raise MalformedObjectNameError(name, f"key '{key}' already defined")
        seen.add(key)

        pos = eq + 1
        if text.startswith('"', pos):
            value, pos = _read_quoted(name, text, pos)
        else:
            comma = text.find(",", pos)
            end = length if comma < 0 else comma
            value = text[pos:end]
            if not value:
                raise MalformedObjectNameError(name, f"empty value for key '{key}'")
            if any(c in _VALUE_ILLEGAL for c in value):
                raise MalformedObjectNameError(name, f"invalid character in value '{value}'")
            pos = end

        properties.append((key, value))

        if pos == length:
            break
        if text[pos] != ",":
            raise MalformedObjectNameError(name, f"unexpected character after value of '{key}'")
        pos += 1
        if pos == length:
            raise MalformedObjectNameError(name, "trailing ','")

    return properties, property_pattern


def _read_quoted(name: str, text: str, start: int) -> Tuple[str, int]:
    """Read a quoted value starting at the opening quote

    Returns:
        Tuple of (value including quotes, position after the closing quote)
    """
    pos = start + 1
    while pos < len(text):
        c = text[pos]
        if c == "\\":
            if pos + 1 >= len(text) or text[pos + 1] not in '"\\*?n':
                raise MalformedObjectNameError(name, "invalid escape sequence in quoted value")
            pos += 2
            continue
        if c == "\n":
            raise MalformedObjectNameError(name, "newline in quoted value")
        if c == '"':
            return text[start:pos + 1], pos + 1
        pos += 1
    raise MalformedObjectNameError(name, "missing closing quote")
