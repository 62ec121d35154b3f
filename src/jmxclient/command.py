"""Command token parsing

A command names an attribute or an operation of a bean, optionally followed
by an equals sign and a comma-delimited argument list:

    Status
    schedule=http://www.archive.org
    setLoggerLevel=org.archive.crawler.Heritrix,FINE

There is no escaping: argument values containing `,` or `=` cannot be
expressed.
"""

import re
from dataclasses import dataclass
from typing import List, Tuple

from jmxclient.errors import MalformedCommandError


# Command name followed by an optional equals and optional argument list
COMMAND_PATTERN = re.compile(r"^([^=]+)(?:=(.*))?$", re.DOTALL)


@dataclass(frozen=True)
class ParsedCommand:
    """Command name and its plain-text arguments"""
    name: str
    raw_args: Tuple[str, ...] = ()

    @property
    def has_args(self) -> bool:
        return len(self.raw_args) > 0

    def __str__(self) -> str:
        if not self.raw_args:
            return self.name
        return f"{self.name}={','.join(self.raw_args)}"


def _split_args(arglist: str) -> List[str]:
    """Split on commas, dropping trailing empty arguments"""
    args = arglist.split(",")
    while args and args[-1] == "":
        args.pop()
    return args


def parse_command(raw: str) -> ParsedCommand:
    """Parse a command token into name and arguments

    Args:
        raw: Token such as `name` or `name=arg0,arg1`

    Returns:
        The parsed command. A token without `=`, or with nothing after it,
        has no arguments.

    Raises:
        MalformedCommandError: If the token does not match the grammar
    """
    match = COMMAND_PATTERN.match(raw)
    if match is None:
        if not raw or raw.startswith("="):
            raise MalformedCommandError(raw, "missing command name")
        raise MalformedCommandError(raw, "does not match name[=arg,...]")

    name = match.group(1)
    arglist = match.group(2)
    if not arglist:
        return ParsedCommand(name)

    if "=" in arglist:
        raise MalformedCommandError(raw, "argument values may not contain '='")

    return ParsedCommand(name, tuple(_split_args(arglist)))
