"""Editor session: open documents, per-document lint tasks, current RuleSet."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Literal, Protocol, TypeAlias

from htmlsnob.config import ConfigError, RuleSet, default_ruleset, load_ruleset
from htmlsnob.lint import lint_text
from htmlsnob.report import PositionEncoding, document_diagnostics

logger = logging.getLogger(__name__)

MessageKind: TypeAlias = Literal["error", "warning", "info", "log"]


class Connection(Protocol):
    """Outbound half of an editor connection."""

    def publish_diagnostics(self, uri: str, diagnostics: list[dict[str, object]], version: int | None) -> None: ...

    def show_message(self, kind: MessageKind, message: str) -> None: ...

    def log_message(self, kind: MessageKind, message: str) -> None: ...


@dataclass(slots=True)
class OpenDocument:
    uri: str
    text: str
    version: int | None = None


class ServerSession:
    """State for one editor connection.

    Every open or change schedules one lint on a worker thread. A newer change to
    the same document cancels the pending lint, and a result that is no longer
    current is dropped instead of published. Each lint reads the RuleSet once, so
    `reconfigure` never affects a lint already running.
    """

    def __init__(
        self,
        connection: Connection,
        ruleset: RuleSet | None = None,
        *,
        config_path: str | Path | None = None,
    ) -> None:
        self._connection = connection
        self._ruleset = ruleset if ruleset is not None else default_ruleset()
        self.config_path = Path(config_path) if config_path is not None else None
        self.position_encoding: PositionEncoding = "utf-16"
        self._documents: dict[str, OpenDocument] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._generations: dict[str, int] = {}

    @property
    def ruleset(self) -> RuleSet:
        return self._ruleset

    @property
    def documents(self) -> dict[str, OpenDocument]:
        return dict(self._documents)

    def did_open(self, uri: str, text: str, version: int | None = None) -> asyncio.Task[None]:
        self._documents[uri] = OpenDocument(uri, text, version)
        return self._schedule(uri)

    def did_change(self, uri: str, text: str, version: int | None = None) -> asyncio.Task[None]:
        self._documents[uri] = OpenDocument(uri, text, version)
        return self._schedule(uri)

    def did_save(self, uri: str, text: str | None = None) -> asyncio.Task[None] | None:
        document = self._documents.get(uri)
        if text is not None:
            version = document.version if document is not None else None
            self._documents[uri] = OpenDocument(uri, text, version)
        elif document is None:
            logger.debug("Ignoring save of unopened document %s", uri)
            return None
        return self._schedule(uri)

    def did_close(self, uri: str) -> None:
        self._cancel(uri)
        self._documents.pop(uri, None)
        self._generations.pop(uri, None)
        self._connection.publish_diagnostics(uri, [], None)

    def reconfigure(self, ruleset: RuleSet) -> None:
        """Swap the RuleSet and re-lint every open document."""
        self._ruleset = ruleset
        for uri in list(self._documents):
            self._schedule(uri)

    def reload_config(self) -> bool:
        """Re-resolve the RuleSet from `config_path`; keep the old one on error."""
        try:
            ruleset = load_ruleset(self.config_path) if self.config_path is not None else default_ruleset()
        except ConfigError as exc:
            logger.warning("Keeping previous configuration: %s", exc)
            self._connection.show_message("error", f"htmlsnob: {exc}")
            return False
        source = str(self.config_path) if self.config_path is not None else "defaults"
        logger.info("Configuration reloaded from %s", source)
        self._connection.log_message("info", f"htmlsnob: configuration reloaded from {source}")
        self.reconfigure(ruleset)
        return True

    async def drain(self) -> None:
        """Wait for every scheduled lint to finish or be cancelled."""
        while self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    def shutdown(self) -> None:
        for uri in list(self._tasks):
            self._cancel(uri)

    def _schedule(self, uri: str) -> asyncio.Task[None]:
        self._cancel(uri)
        generation = self._generations.get(uri, 0) + 1
        self._generations[uri] = generation
        document = self._documents[uri]
        task = asyncio.get_running_loop().create_task(
            self._lint_and_publish(document, self._ruleset, self.position_encoding, generation)
        )
        self._tasks[uri] = task
        task.add_done_callback(lambda done: self._forget(uri, done))
        return task

    def _cancel(self, uri: str) -> None:
        task = self._tasks.pop(uri, None)
        if task is not None and not task.done():
            task.cancel()

    def _forget(self, uri: str, task: asyncio.Task[None]) -> None:
        if self._tasks.get(uri) is task:
            del self._tasks[uri]

    def _is_current(self, uri: str, generation: int) -> bool:
        return self._generations.get(uri) == generation

    async def _lint_and_publish(
        self,
        document: OpenDocument,
        ruleset: RuleSet,
        position_encoding: PositionEncoding,
        generation: int,
    ) -> None:
        try:
            result = await asyncio.to_thread(lint_text, document.text, ruleset, document.uri)
            diagnostics = document_diagnostics(result, position_encoding)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Lint failed for %s", document.uri)
            diagnostics = []

        if not self._is_current(document.uri, generation):
            logger.debug("Dropping stale diagnostics for %s", document.uri)
            return
        self._connection.publish_diagnostics(document.uri, diagnostics, document.version)
