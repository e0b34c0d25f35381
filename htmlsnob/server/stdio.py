"""JSON-RPC over stdio for the editor session.

Messages are framed with a `Content-Length` header as in the Language Server
Protocol. Only full-document sync is supported.
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Callable, Sequence
import json
import logging
from pathlib import Path, PurePath
import sys
from typing import BinaryIO, Final
from urllib.parse import urlparse
from urllib.request import url2pathname

from htmlsnob.config import CONFIG_FILE_NAMES, ConfigError, find_config_file, load_ruleset
from htmlsnob.log import LogConfig, configure_logging
from htmlsnob.server.session import MessageKind, ServerSession

logger = logging.getLogger(__name__)

SERVER_NAME: Final[str] = "htmlsnob"

METHOD_NOT_FOUND: Final[int] = -32601
INVALID_REQUEST: Final[int] = -32600
INTERNAL_ERROR: Final[int] = -32603

MESSAGE_TYPES: Final[dict[MessageKind, int]] = {
    "error": 1,
    "warning": 2,
    "info": 3,
    "log": 4,
}

TEXT_DOCUMENT_SYNC_FULL: Final[int] = 1


def read_message(stream: BinaryIO) -> dict[str, object] | None:
    """Read one framed message; None at end of input."""
    content_length: int | None = None
    while True:
        line = stream.readline()
        if not line:
            return None
        line = line.strip()
        if not line:
            break
        name, _, value = line.decode("ascii").partition(":")
        if name.strip().lower() == "content-length":
            content_length = int(value.strip())

    if content_length is None:
        raise ValueError("message without Content-Length header")

    data = stream.read(content_length)
    logger.debug("Read %d bytes", len(data))
    message = json.loads(data.decode("utf-8"))
    if not isinstance(message, dict):
        raise ValueError("message must be a JSON object")
    return message


def write_message(stream: BinaryIO, message: dict[str, object]) -> None:
    data = json.dumps(message, separators=(",", ":")).encode("utf-8")
    stream.write(f"Content-Length: {len(data)}\r\n\r\n".encode("ascii"))
    stream.write(data)
    stream.flush()


def uri_to_path(uri: str) -> Path | None:
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return None
    return Path(url2pathname(parsed.path))


class StdioConnection:
    """Writes notifications and responses to the client."""

    def __init__(self, writer: BinaryIO) -> None:
        self._writer = writer

    def publish_diagnostics(self, uri: str, diagnostics: list[dict[str, object]], version: int | None) -> None:
        params: dict[str, object] = {"uri": uri, "diagnostics": diagnostics}
        if version is not None:
            params["version"] = version
        self.notify("textDocument/publishDiagnostics", params)

    def show_message(self, kind: MessageKind, message: str) -> None:
        self.notify("window/showMessage", {"type": MESSAGE_TYPES[kind], "message": message})

    def log_message(self, kind: MessageKind, message: str) -> None:
        self.notify("window/logMessage", {"type": MESSAGE_TYPES[kind], "message": message})

    def notify(self, method: str, params: dict[str, object]) -> None:
        write_message(self._writer, {"jsonrpc": "2.0", "method": method, "params": params})

    def respond(self, request_id: object, result: object) -> None:
        write_message(self._writer, {"jsonrpc": "2.0", "id": request_id, "result": result})

    def respond_error(self, request_id: object, code: int, message: str) -> None:
        write_message(
            self._writer,
            {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}},
        )


class LanguageServer:
    """Dispatches incoming messages to a ServerSession."""

    def __init__(self, connection: StdioConnection) -> None:
        self.connection = connection
        self.session = ServerSession(connection)
        self.root: Path | None = None
        self.shutdown_requested = False
        self.exited = False
        self._requests: dict[str, Callable[[dict[str, object]], object]] = {
            "initialize": self._initialize,
            "shutdown": self._shutdown,
        }
        self._notifications: dict[str, Callable[[dict[str, object]], None]] = {
            "initialized": self._initialized,
            "exit": self._exit,
            "textDocument/didOpen": self._did_open,
            "textDocument/didChange": self._did_change,
            "textDocument/didSave": self._did_save,
            "textDocument/didClose": self._did_close,
            "workspace/didChangeWatchedFiles": self._did_change_watched_files,
        }

    def handle(self, message: dict[str, object]) -> None:
        method = message.get("method")
        params = message.get("params")
        if not isinstance(params, dict):
            params = {}

        if "id" in message:
            request_id = message["id"]
            if not isinstance(method, str):
                self.connection.respond_error(request_id, INVALID_REQUEST, "missing method")
                return
            handler = self._requests.get(method)
            if handler is None:
                logger.debug("Unknown request %s", method)
                self.connection.respond_error(request_id, METHOD_NOT_FOUND, f"Unknown method: {method}")
                return
            try:
                result = handler(params)
            except Exception as exc:
                logger.exception("Error handling %s", method)
                self.connection.respond_error(request_id, INTERNAL_ERROR, str(exc))
                return
            self.connection.respond(request_id, result)
            return

        if isinstance(method, str):
            notification = self._notifications.get(method)
            if notification is None:
                logger.debug("Ignoring notification %s", method)
                return
            notification(params)

    # -------------------------
    # Lifecycle
    # -------------------------

    def _initialize(self, params: dict[str, object]) -> dict[str, object]:
        root_uri = params.get("rootUri")
        if isinstance(root_uri, str):
            self.root = uri_to_path(root_uri)
        elif isinstance(params.get("rootPath"), str):
            self.root = Path(str(params["rootPath"]))
        general = _mapping(_mapping(params.get("capabilities")).get("general"))
        encodings = general.get("positionEncodings")
        if isinstance(encodings, list) and "utf-32" in encodings:
            self.session.position_encoding = "utf-32"
        self._load_workspace_config()
        return {
            "capabilities": {
                "positionEncoding": self.session.position_encoding,
                "textDocumentSync": {
                    "openClose": True,
                    "change": TEXT_DOCUMENT_SYNC_FULL,
                    "save": {"includeText": True},
                },
            },
            "serverInfo": {"name": SERVER_NAME},
        }

    def _initialized(self, params: dict[str, object]) -> None:
        logger.debug("Client initialized")

    def _shutdown(self, params: dict[str, object]) -> None:
        self.shutdown_requested = True
        return None

    def _exit(self, params: dict[str, object]) -> None:
        self.exited = True

    def _load_workspace_config(self) -> None:
        self.session.config_path = find_config_file(self.root) if self.root is not None else None
        if self.session.config_path is None:
            return
        try:
            self.session.reconfigure(load_ruleset(self.session.config_path))
        except ConfigError as exc:
            logger.warning("Using default configuration: %s", exc)
            self.connection.show_message("error", f"htmlsnob: {exc}")

    # -------------------------
    # Documents
    # -------------------------

    def _did_open(self, params: dict[str, object]) -> None:
        document = _mapping(params.get("textDocument"))
        uri, text = document.get("uri"), document.get("text")
        if isinstance(uri, str) and isinstance(text, str):
            self.session.did_open(uri, text, _version(document))

    def _did_change(self, params: dict[str, object]) -> None:
        document = _mapping(params.get("textDocument"))
        uri = document.get("uri")
        changes = params.get("contentChanges")
        if not isinstance(uri, str) or not isinstance(changes, list) or not changes:
            return
        # Full sync: the last change carries the whole document.
        text = _mapping(changes[-1]).get("text")
        if isinstance(text, str):
            self.session.did_change(uri, text, _version(document))

    def _did_save(self, params: dict[str, object]) -> None:
        uri = _mapping(params.get("textDocument")).get("uri")
        text = params.get("text")
        if isinstance(uri, str):
            self.session.did_save(uri, text if isinstance(text, str) else None)

    def _did_close(self, params: dict[str, object]) -> None:
        uri = _mapping(params.get("textDocument")).get("uri")
        if isinstance(uri, str):
            self.session.did_close(uri)

    def _did_change_watched_files(self, params: dict[str, object]) -> None:
        changes = params.get("changes")
        if not isinstance(changes, list):
            return
        for change in changes:
            uri = _mapping(change).get("uri")
            if isinstance(uri, str) and PurePath(urlparse(uri).path).name in CONFIG_FILE_NAMES:
                break
        else:
            return
        if self.root is not None:
            self.session.config_path = find_config_file(self.root)
        self.session.reload_config()


def _mapping(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}


def _version(document: dict[str, object]) -> int | None:
    version = document.get("version")
    return version if isinstance(version, int) else None


async def serve(reader: BinaryIO | None = None, writer: BinaryIO | None = None) -> int:
    """Run the message loop until `exit` or end of input.

    Returns 0 when the client shut down cleanly, 1 otherwise.
    """
    reader = reader if reader is not None else sys.stdin.buffer
    writer = writer if writer is not None else sys.stdout.buffer
    server = LanguageServer(StdioConnection(writer))

    while not server.exited:
        try:
            message = await asyncio.to_thread(read_message, reader)
        except ValueError as exc:
            logger.error("Dropping malformed message: %s", exc)
            continue
        if message is None:
            break
        logger.debug("Received %s", message.get("method"))
        server.handle(message)

    if server.shutdown_requested:
        await server.session.drain()
    else:
        server.session.shutdown()
    return 0 if server.shutdown_requested else 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="htmlsnob-lsp", description="htmlsnob language server over stdio.")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    configure_logging(LogConfig(log_level=level, log_file=args.log_file))
    logger.debug("Starting %s language server", SERVER_NAME)
    return asyncio.run(serve())


if __name__ == "__main__":
    raise SystemExit(main())
