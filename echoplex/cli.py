"""Command line entry point: run an echo server or show a singleton."""

from __future__ import annotations

import argparse
import sys

from .epoll_server import EpollTcpServer
from .epoll_server import SERVER_PORT
from .select_server import MAX_CLIENTS, SelectTcpServer
from .singleton import SingletonEager, SingletonLazy


def _build_parser():
    parser = argparse.ArgumentParser(prog="echoplex")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="run a TCP echo server")
    serve.add_argument("--mode", choices=("epoll", "select"), default="epoll")
    serve.add_argument("--host", default="")
    serve.add_argument("--port", type=int, default=SERVER_PORT)
    serve.add_argument("--max-clients", type=int, default=MAX_CLIENTS)

    single = commands.add_parser("singleton", help="print a singleton's greeting")
    single.add_argument("--kind", choices=("eager", "lazy"), default="eager")
    return parser


def main(argv=None):
    """Run the command and return the exit status."""
    args = _build_parser().parse_args(argv)

    if args.command == "singleton":
        cls = SingletonEager if args.kind == "eager" else SingletonLazy
        cls.get_instance().print_greeting()
        return 0

    try:
        if args.mode == "select":
            server = SelectTcpServer(args.host, args.port, args.max_clients)
        else:
            server = EpollTcpServer(args.host, args.port)
        with server:
            server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except (OSError, ValueError) as exc:
        print(f"echoplex: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())