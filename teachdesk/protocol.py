"""JSON request/response exchange between the teacher client and the server."""

from __future__ import annotations

import json
import logging
import select
import socket
from dataclasses import dataclass, field
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 12345
CONNECT_TIMEOUT = 3.0
RESPONSE_TIMEOUT = 5.0
ROLE = "teacher"

_CHUNK = 65536


def build_request(action: str, data: Mapping[str, Any] | None = None) -> bytes:
    """Encode a teacher request; ``data`` is included only when it is not empty."""
    request: dict[str, Any] = {"role": ROLE, "action": action}
    if data:
        request["data"] = dict(data)
    text = json.dumps(request, ensure_ascii=False, indent=4, sort_keys=True)
    return (text + "\n").encode("utf-8")


@dataclass
class Response:
    """A decoded server response."""

    action: str
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        return "data" in self.body

    @property
    def data(self) -> dict[str, Any]:
        """The ``data`` object of the response, or an empty dict."""
        value = self.body.get("data")
        return value if isinstance(value, dict) else {}


def parse_response(raw: bytes | str) -> Response:
    """Decode a server response; it must be a JSON object."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError("response is not valid UTF-8") from exc
    try:
        doc = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("response is not valid JSON") from exc
    if not isinstance(doc, dict):
        raise ValueError("response is not a JSON object")
    action = doc.get("action")
    return Response(action=action if isinstance(action, str) else "", body=doc)


class TeacherConnection:
    """A TCP connection to the server that carries teacher requests."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = CONNECT_TIMEOUT,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.response_timeout = RESPONSE_TIMEOUT
        self._sock: socket.socket | None = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def __enter__(self) -> "TeacherConnection":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def connect(self) -> None:
        """Open the connection, raising ``ConnectionError`` when it fails."""
        if self._sock is not None:
            return
        try:
            self._sock = socket.create_connection((self.host, self.port), self.timeout)
        except socket.gaierror as exc:
            raise ConnectionError("Сервер не найден.") from exc
        except ConnectionRefusedError as exc:
            raise ConnectionError("Соединение отклонено сервером.") from exc
        except OSError as exc:
            raise ConnectionError(f"Ошибка: {exc}") from exc

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("not connected to the server")
        return self._sock

    def send_request(
        self, action: str, data: Mapping[str, Any] | None = None, wait: bool = True
    ) -> bytes | None:
        """Send a request; when ``wait`` is set, return the reply bytes.

        Returns ``None`` when not waiting or when no reply arrives in time.
        """
        sock = self._require()
        sock.sendall(build_request(action, data))
        if not wait:
            return None
        ready, _, _ = select.select([sock], [], [], self.response_timeout)
        if not ready:
            logger.warning("timed out waiting for a reply to %s", action)
            return None
        return self.receive()

    def receive(self) -> bytes:
        """Wait for data and return everything that is available."""
        sock = self._require()
        sock.settimeout(self.response_timeout)
        first = sock.recv(_CHUNK)
        if not first:
            self.close()
            raise ConnectionError("Сервер разорвал соединение.")
        chunks = [first]
        sock.setblocking(False)
        try:
            while True:
                try:
                    chunk = sock.recv(_CHUNK)
                except (BlockingIOError, InterruptedError):
                    break
                if not chunk:
                    break
                chunks.append(chunk)
        finally:
            sock.settimeout(self.response_timeout)
        return b"".join(chunks)