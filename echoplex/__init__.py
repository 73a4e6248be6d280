"""TCP echo servers on select and epoll, lazy and eager singletons, and a command line."""

__version__ = "0.1.0"
__all__ = ["cli", "epoll_server", "select_server", "singleton"]