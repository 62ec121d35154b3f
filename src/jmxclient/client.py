"""Command batches against one bean

`JmxClient.run_commands` is the entry point for the command-line layer:
each token is parsed, resolved against the bean's introspection snapshot,
coerced and invoked before the next one starts. The first failure ends
the batch.
"""

import logging
from typing import Iterator, List, Optional, Sequence

from jmxclient.bean.feature import BeanInfo
from jmxclient.bean.invoker import Invoker, build_action
from jmxclient.bean.options import list_options
from jmxclient.bean.resolver import FeatureResolver
from jmxclient.coerce import TypeConverterRegistry
from jmxclient.command import parse_command
from jmxclient.errors import BeanNotFoundError, JmxClientError
from jmxclient.object_name import ObjectName
from jmxclient.result import render
from jmxclient.session import BeanRef, ManagementSession


logger = logging.getLogger(__name__)


class JmxClient:
    """Runs commands against beans of one session"""

    def __init__(self, session: ManagementSession, registry: Optional[TypeConverterRegistry] = None):
        """Create a client

        Args:
            session: Open management session
            registry: Type converters for arguments (default registry if None)
        """
        self.session = session
        self.registry = registry
        self.invoker = Invoker(session)

    def run_command(self, bean: BeanRef, token: str, info: BeanInfo) -> Optional[str]:
        """Run one command token against an introspection snapshot

        Returns:
            The rendered output, or None for a command with no result
        """
        parsed = parse_command(token)
        descriptor = FeatureResolver.for_bean(info).resolve(parsed.name)
        action = build_action(parsed, descriptor, self.registry)
        logger.debug("%s on %s -> %s", token, bean, type(action).__name__)
        result = self.invoker.invoke(bean, action)
        return render(parsed.name, result)

    def run_commands(self, bean: BeanRef, tokens: Sequence[str]) -> Iterator[str]:
        """Run a batch of command tokens against one bean

        The bean is introspected once for the whole batch; every token is
        resolved afresh against that snapshot.

        Yields:
            Rendered output of each command that produced a result

        Raises:
            JmxClientError: The first failure, with the command text and
                bean reference attached. Later tokens are not run.
        """
        try:
            info = self.session.introspect(bean)
        except JmxClientError as e:
            raise e.add_context(bean=str(bean))

        for token in tokens:
            try:
                output = self.run_command(bean, token, info)
            except JmxClientError as e:
                raise e.add_context(command=token, bean=str(bean))
            if output is not None:
                yield output

    def list_options(self, bean: BeanRef) -> str:
        """Attribute and operation catalog of a bean"""
        try:
            info = self.session.introspect(bean)
        except JmxClientError as e:
            raise e.add_context(bean=str(bean))
        return list_options(info.attributes, info.operations)

    def list_beans(self, pattern: Optional[BeanRef] = None) -> List[str]:
        """Canonical names of registered beans matching a name or pattern"""
        return [name.canonical_name for name in self.session.query_beans(pattern)]

    def process(self, bean_name: Optional[str], tokens: Sequence[str] = ()) -> Iterator[str]:
        """Handle a bean argument and its commands

        - no bean name, or one matching several beans: yields their names
        - a single matching bean with no commands: yields its catalog
        - otherwise: yields the output of each command

        Raises:
            BeanNotFoundError: If nothing matches the bean name
            JmxClientError: The first failing command
        """
        pattern = ObjectName.from_string(bean_name) if bean_name else None
        beans = self.session.query_beans(pattern)

        if not beans:
            raise BeanNotFoundError(pattern.canonical_name if pattern else "*:*")

        if len(beans) > 1:
            for name in beans:
                yield name.canonical_name
            return

        bean = beans[0]
        if not tokens:
            listing = self.list_options(bean)
            if listing:
                yield listing
            return

        yield from self.run_commands(bean, tokens)
