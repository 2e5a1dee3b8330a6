import logging
import socket
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from howsit_tui.config import Settings
from howsit_tui.errors import TransportError
from howsit_tui.memcached.parser import Scope


logger = logging.getLogger(__name__)

RECV_SIZE = 4096
TERMINATORS = {b"END", b"ERROR"}
ERROR_PREFIXES = (b"CLIENT_ERROR", b"SERVER_ERROR")

REPLAY_FILES = {
    Scope.GLOBAL.command: "stats.txt",
    Scope.SLAB.command: "slabs.txt",
    Scope.ITEM.command: "items.txt",
}


class StatsSource(Protocol):
    def fetch(self, command: str) -> str: ...


def _response_complete(buffer: bytes) -> bool:
    if not buffer.endswith(b"\r\n"):
        return False
    last_line = buffer[:-2].rsplit(b"\r\n", 1)[-1]
    return last_line in TERMINATORS or last_line.startswith(ERROR_PREFIXES)


class StatsClient:
    """Opens one connection per command, the way the stats tool always has."""

    def __init__(self, host: str, port: int, timeout: float | None = 5.0) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout

    def fetch(self, command: str) -> str:
        try:
            conn = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except socket.gaierror as exc:
            raise TransportError(f"cannot resolve {self.host}: {exc}") from exc
        except OSError as exc:
            raise TransportError(f"cannot connect to {self.host}:{self.port}: {exc}") from exc

        with conn:
            try:
                conn.sendall(f"{command}\r\n".encode("ascii"))
            except OSError as exc:
                raise TransportError(f"send of {command!r} failed: {exc}") from exc

            buffer = b""
            while not _response_complete(buffer):
                try:
                    chunk = conn.recv(RECV_SIZE)
                except OSError as exc:
                    raise TransportError(f"receive of {command!r} failed: {exc}") from exc
                if not chunk:
                    raise TransportError(f"connection closed before {command!r} completed")
                buffer += chunk

        logger.debug("fetched %d bytes for %r from %s:%s", len(buffer), command, self.host, self.port)
        return buffer.decode("utf-8", errors="replace")


class ReplaySource:
    """Serves captured responses instead of talking to a server."""

    def __init__(self, responses: Mapping[str, str]) -> None:
        self._responses = dict(responses)

    @classmethod
    def from_directory(cls, directory: Path) -> "ReplaySource":
        responses: dict[str, str] = {}
        for command, filename in REPLAY_FILES.items():
            path = directory / filename
            try:
                responses[command] = path.read_text()
            except OSError as exc:
                raise TransportError(f"cannot read replay capture {path}: {exc}") from exc
        return cls(responses)

    def fetch(self, command: str) -> str:
        try:
            return self._responses[command]
        except KeyError:
            raise TransportError(f"no captured response for {command!r}") from None


def make_client(settings: Settings) -> StatsSource:
    if settings.replay_dir is not None:
        return ReplaySource.from_directory(settings.replay_dir)
    return StatsClient(settings.server, settings.port, timeout=settings.timeout_seconds)
