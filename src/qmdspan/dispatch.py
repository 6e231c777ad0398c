"""Dispatch of code blocks to interactive language sessions.

The dispatcher turns a cursor position (or the whole document) into one
payload per language and hands it to a ``Session``. Launching and feeding
processes is the session's job; this module only resolves language names and
builds payloads.

Language resolution goes through an explicit ``LanguageTable``:

- ``aliases`` map short names to canonical ones (``"py" -> "python"``)
- ``commands`` map canonical names to a session launch command

Lookups return None on a miss. Only the dispatch boundary treats a missing
command as fatal: ``UnknownLanguageError`` is raised before anything is sent.

Example:
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.sent = []
    ...     def send(self, language, command, text):
    ...         self.sent.append((language, text))
    >>> session = Recorder()
    >>> Dispatcher(session).send_all("```{py}\\nprint(1)\\n```\\n")
    (DispatchRequest(language='python', command='python', text='print(1)', block_count=1),)

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from qmdspan.aggregate import AggregatedCode, Position, aggregate_code, block_text
from qmdspan.config import ScanConfig
from qmdspan.errors import DispatchError, UnknownLanguageError
from qmdspan.locator import find_interactive_block_at
from qmdspan.scanners.code import scan_code_blocks
from qmdspan.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "py": "python",
        "python3": "python",
        "ipython": "python",
        "jl": "julia",
        "sh": "bash",
        "shell": "bash",
        "js": "javascript",
        "node": "javascript",
    }
)

DEFAULT_COMMANDS: Mapping[str, str] = MappingProxyType(
    {
        "python": "python",
        "r": "R",
        "julia": "julia",
        "bash": "bash",
        "javascript": "node",
        "ojs": "node",
    }
)


class Session(Protocol):
    """Protocol for interactive language sessions.

    Implementations own process lifetime. ``send`` may start a process on
    first use and may return before the code has finished running.
    """

    def send(self, language: str, command: str, text: str) -> None:
        """Send ``text`` to the session for ``language``.

        Args:
            language: Canonical language name
            command: Launch command from the LanguageTable
            text: Code to evaluate
        """
        ...


@dataclass(frozen=True, slots=True)
class LanguageTable:
    """Alias and command tables for language resolution.

    Keys are matched case-insensitively; both tables are stored lower-cased.
    """

    aliases: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES))
    commands: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_COMMANDS))

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "aliases",
            MappingProxyType({k.lower(): v.lower() for k, v in self.aliases.items()}),
        )
        object.__setattr__(
            self,
            "commands",
            MappingProxyType({k.lower(): v for k, v in self.commands.items()}),
        )

    @classmethod
    def default(cls) -> LanguageTable:
        return cls()

    @classmethod
    def from_dict(cls, config_dict: dict) -> LanguageTable:
        """Build a table from settings, layered over the defaults.

        Only ``aliases`` and ``commands`` keys are read; unknown keys are
        ignored.

        Example:
            >>> table = LanguageTable.from_dict({"commands": {"python": "ipython"}})
            >>> table.command_for("py")
            'ipython'
        """
        aliases = {**DEFAULT_ALIASES, **config_dict.get("aliases", {})}
        commands = {**DEFAULT_COMMANDS, **config_dict.get("commands", {})}
        return cls(aliases=aliases, commands=commands)

    def canonical(self, name: str) -> str:
        """Normalize a raw language tag to its canonical name."""
        key = name.strip().lower()
        return self.aliases.get(key, key)

    def command_for(self, name: str) -> str | None:
        """Return the session command for a language, or None."""
        return self.commands.get(self.canonical(name))

    def require_command(self, name: str) -> str:
        """Return the session command for a language.

        Raises:
            UnknownLanguageError: If no command is configured.
        """
        command = self.command_for(name)
        if command is None:
            logger.warning("No session command for language %r", name)
            raise UnknownLanguageError(self.canonical(name), self.commands.keys())
        return command


@dataclass(frozen=True, slots=True)
class DispatchRequest:
    """One payload for one session."""

    language: str
    command: str
    text: str
    block_count: int = 1


class Dispatcher:
    """Send code blocks from a document to language sessions.

    Every request is resolved before the first ``send`` call, so an unknown
    language aborts the whole dispatch with nothing sent.

    Thread Safety:
        The dispatcher holds no per-call state; thread safety is that of the
        session.
    """

    __slots__ = ("_config", "_session", "_table")

    def __init__(
        self,
        session: Session,
        table: LanguageTable | None = None,
        *,
        config: ScanConfig | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            session: Receiver of the code payloads
            table: Language tables (defaults if None)
            config: Scan configuration (active context config if None)
        """
        self._session = session
        self._table = table or LanguageTable.default()
        self._config = config

    @property
    def table(self) -> LanguageTable:
        return self._table

    def plan(self, aggregated: AggregatedCode) -> tuple[DispatchRequest, ...]:
        """Resolve aggregated code into requests without sending anything.

        Expects code aggregated with ``key=table.canonical`` so each
        language's blocks are already joined in document order. Any raw tags
        that still share a canonical language are merged in first-seen order.

        Raises:
            UnknownLanguageError: If any language has no command.
        """
        merged: dict[str, list[str]] = {}
        counts: dict[str, int] = {}
        for raw, source in aggregated.sources.items():
            language = self._table.canonical(raw)
            merged.setdefault(language, []).append(source)
            counts[language] = counts.get(language, 0) + aggregated.counts.get(raw, 0)

        return tuple(
            DispatchRequest(
                language=language,
                command=self._table.require_command(language),
                text="\n".join(sources),
                block_count=counts[language],
            )
            for language, sources in merged.items()
        )

    def send_block_at(self, text: str, offset: int) -> DispatchRequest | None:
        """Send the interactive block under ``offset``.

        Returns:
            The request sent, or None when the offset is not inside an
            interactive block.
        """
        block = find_interactive_block_at(scan_code_blocks(text, self._config), offset)
        if block is None:
            logger.debug("No interactive code block at offset %d", offset)
            return None

        language = self._table.canonical(block.language)
        request = DispatchRequest(
            language=language,
            command=self._table.require_command(language),
            text=block_text(text, block),
        )
        self._send((request,))
        return request

    def send_above(self, text: str, offset: int) -> tuple[DispatchRequest, ...]:
        """Send interactive blocks ending strictly before ``offset``."""
        return self._send_relative(text, offset, Position.BEFORE)

    def send_below(self, text: str, offset: int) -> tuple[DispatchRequest, ...]:
        """Send interactive blocks starting strictly after ``offset``."""
        return self._send_relative(text, offset, Position.AFTER)

    def send_all(self, text: str) -> tuple[DispatchRequest, ...]:
        """Send every interactive block in the document."""
        blocks = [b for b in scan_code_blocks(text, self._config) if b.interactive]
        requests = self.plan(aggregate_code(text, blocks, key=self._table.canonical))
        self._send(requests)
        return requests

    def _send_relative(
        self, text: str, offset: int, position: Position
    ) -> tuple[DispatchRequest, ...]:
        blocks = [b for b in scan_code_blocks(text, self._config) if b.interactive]
        aggregated = aggregate_code(
            text, blocks, offset=offset, position=position, key=self._table.canonical
        )
        requests = self.plan(aggregated)
        self._send(requests)
        return requests

    def _send(self, requests: tuple[DispatchRequest, ...]) -> None:
        for request in requests:
            logger.info(
                "Sending %d block(s) to %s session (%s)",
                request.block_count,
                request.language,
                request.command,
            )
            try:
                self._session.send(request.language, request.command, request.text)
            except OSError as exc:
                raise DispatchError(request.language, str(exc)) from exc


__all__ = [
    "DEFAULT_ALIASES",
    "DEFAULT_COMMANDS",
    "DispatchRequest",
    "Dispatcher",
    "LanguageTable",
    "Session",
]
