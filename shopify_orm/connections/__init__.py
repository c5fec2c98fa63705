from .proxy import ConnectionProxy, build_connection_arguments, load_connection

__all__ = [
    "ConnectionProxy",
    "build_connection_arguments",
    "load_connection",
]
