"""Editor integration."""

from htmlsnob.server.session import Connection, MessageKind, OpenDocument, ServerSession
from htmlsnob.server.stdio import (
    LanguageServer,
    StdioConnection,
    main,
    read_message,
    serve,
    uri_to_path,
    write_message,
)

__all__ = [
    "Connection",
    "LanguageServer",
    "MessageKind",
    "OpenDocument",
    "ServerSession",
    "StdioConnection",
    "main",
    "read_message",
    "serve",
    "uri_to_path",
    "write_message",
]
