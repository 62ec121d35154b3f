"""Command-line entry point

Usage: jmxclient [options] USER:PASS HOST:PORT [BEAN] [COMMAND ...]

Results are written to stdout, one block per command. Diagnostics go to
stderr through logging.
"""

import argparse
import logging
import sys
from typing import List, Optional

from jmxclient.client import JmxClient
from jmxclient.errors import JmxClientError
from jmxclient.session import SessionConfig, connect, format_credentials


logger = logging.getLogger("jmxclient")

EXIT_OK = 0
EXIT_ERROR = 1

DESCRIPTION = "A simple command-line client for JMX agents reached through Jolokia."

EPILOG = """\
COMMAND is an attribute to fetch or an operation to run. Attributes begin
with a capital letter, e.g. 'Status' or 'Started'; operations do not. An
attribute is set and an operation given arguments by adding '=' followed by
comma-delimited values. Pass several commands to run more than one per
invocation.

examples:
  list beans on an agent without authentication:
    jmxclient - localhost:8778
  list attributes and operations of a bean:
    jmxclient - localhost:8778 java.lang:type=Memory
  run an operation with an argument:
    jmxclient - localhost:8778 org.archive.crawler:name=Heritrix,type=Service \\
        schedule=http://www.archive.org
  set a logger level on a password protected agent:
    jmxclient controlRole:secret localhost:8778 java.util.logging:type=Logging \\
        setLoggerLevel=org.archive.crawler.Heritrix,FINE
"""


class OneLineFormatter(logging.Formatter):
    """Writes each record on one line with a short date

    `MM/DD/YYYY HH:MM:SS +ZZZZ <logger> <message>`, followed by the
    traceback if one is attached.
    """

    def __init__(self):
        super().__init__(fmt="%(asctime)s %(name)s %(message)s", datefmt="%m/%d/%Y %H:%M:%S %z")


def configure_logging(verbose: bool = False, stream=None) -> logging.Handler:
    """Install the one-line formatter on a stderr handler of the package logger"""
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(OneLineFormatter())
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jmxclient",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "userpass",
        metavar="USER:PASS",
        help="username and password, e.g. 'controlRole:secret'; '-' for none",
    )
    parser.add_argument(
        "hostport",
        metavar="HOST:PORT",
        help="agent host and port, e.g. localhost:8778; lists registered beans if no BEAN follows",
    )
    parser.add_argument(
        "bean",
        metavar="BEAN",
        nargs="?",
        help="target bean name or pattern; lists its attributes and operations if no COMMAND follows",
    )
    parser.add_argument(
        "commands",
        metavar="COMMAND",
        nargs="*",
        help="attribute to get or set, or operation to run: name[=arg,...]",
    )
    parser.add_argument("--path", dest="agent_path", help="agent path (default: /jolokia)")
    parser.add_argument("--https", action="store_true", help="connect over https")
    parser.add_argument("--timeout", type=float, help="per-request timeout in seconds (default: none)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests and responses")
    return parser


def build_config(args: argparse.Namespace) -> SessionConfig:
    config = SessionConfig()
    if args.agent_path is not None:
        config.with_agent_path(args.agent_path)
    if args.https:
        config.with_scheme("https")
    if args.timeout is not None:
        config.with_timeout(args.timeout)
    return config


def run(args: argparse.Namespace, out=None) -> int:
    """Connect, process the bean and its commands, and disconnect

    Returns:
        Process exit code
    """
    out = out if out is not None else sys.stdout
    try:
        credentials = format_credentials(args.userpass)
        config = build_config(args)
        url = config.service_url(args.hostport)
        with connect(url, credentials, config) as session:
            client = JmxClient(session)
            for output in client.process(args.bean, args.commands):
                print(output, file=out)
    except JmxClientError as e:
        logger.error("%s", e)
        logger.debug("Failure details", exc_info=True)
        return EXIT_ERROR
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
