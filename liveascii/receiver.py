"""Background UDP listener that forwards text messages into a queue."""

from __future__ import annotations

import queue
import socket
import threading

DEFAULT_HOST = "127.0.0.1"


class MsgReceiver:
    """Receives UTF-8 datagrams on a local port and puts each message on ``sender``."""

    _POLL_SECONDS = 0.2
    _BUFFER_SIZE = 2048

    def __init__(self, port: int, sender: queue.Queue, host: str = DEFAULT_HOST) -> None:
        self.port = port
        self.sender = sender
        self._host = host
        self._running = threading.Event()
        self._thread: threading.Thread | None = None
        self._address: tuple[str, int] | None = None

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    @property
    def address(self) -> tuple[str, int] | None:
        """The bound (host, port) while listening."""
        return self._address

    def run(self) -> None:
        """Start listening; does nothing if already running. Raises OSError if binding fails."""
        if self._running.is_set():
            return
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self._host, self.port))
            sock.settimeout(self._POLL_SECONDS)
        except OSError:
            sock.close()
            raise
        self._address = sock.getsockname()
        self._running.set()
        self._thread = threading.Thread(target=self._listen, args=(sock,), daemon=True)
        self._thread.start()

    def _listen(self, sock: socket.socket) -> None:
        with sock:
            while self._running.is_set():
                try:
                    data, _ = sock.recvfrom(self._BUFFER_SIZE)
                except socket.timeout:
                    continue
                except OSError:
                    continue
                try:
                    text = data.decode("utf-8")
                except UnicodeDecodeError:
                    continue
                self.sender.put(text)

    def stop(self) -> None:
        self._running.clear()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout=2 * self._POLL_SECONDS + 1)
        self._address = None