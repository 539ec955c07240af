"""Receiver for face-tracking packets sent over UDP."""

from __future__ import annotations

import socket
import struct
import threading
from dataclasses import dataclass
from itertools import islice

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 11573

_LANDMARKS = 68
_PNP_POINTS = 70
_PACKET = struct.Struct(
    f"<diffffBf4f3f3f{_LANDMARKS}f{_LANDMARKS * 2}f{_PNP_POINTS * 3}f14f"
)


@dataclass(frozen=True)
class Packet:
    now: float
    id: int
    width: float
    height: float
    eye_blink_right: float
    eye_blink_left: float
    success: int
    pnp_error: float
    quaternion: tuple[float, float, float, float]
    euler: tuple[float, float, float]
    translation: tuple[float, float, float]
    lms_confidence: tuple[float, ...]
    lms: tuple[tuple[float, float], ...]
    pnp_points: tuple[tuple[float, float, float], ...]
    eye_left: float
    eye_right: float
    eye_steepness_left: float
    eye_up_down_left: float
    eye_quirk_left: float
    eye_steepness_right: float
    eye_up_down_right: float
    eye_quirk_right: float
    mouth_corner_updown_left: float
    mouth_corner_inout_left: float
    mouth_corner_updown_right: float
    mouth_corner_inout_right: float
    mouth_open: float
    mouth_wide: float


def parse_packet(buf: bytes) -> Packet:
    """Decode a little-endian tracking packet; trailing bytes are ignored.

    Landmarks arrive as (y, x) pairs and are stored as (x, y).
    """
    if len(buf) < _PACKET.size:
        raise ValueError(f"packet too short: {len(buf)} of {_PACKET.size} bytes")
    values = iter(_PACKET.unpack_from(buf))

    def take(n: int) -> tuple:
        return tuple(islice(values, n))

    now, packet_id, width, height, blink_right, blink_left, success, pnp_error = take(8)
    quaternion = take(4)
    euler = take(3)
    translation = take(3)
    lms_confidence = take(_LANDMARKS)
    raw_lms = take(_LANDMARKS * 2)
    raw_pnp = take(_PNP_POINTS * 3)
    features = take(14)

    return Packet(
        now,
        packet_id,
        width,
        height,
        blink_right,
        blink_left,
        success,
        pnp_error,
        quaternion,
        euler,
        translation,
        lms_confidence,
        tuple(zip(raw_lms[1::2], raw_lms[0::2])),
        tuple(zip(raw_pnp[0::3], raw_pnp[1::3], raw_pnp[2::3])),
        *features,
    )


class Tracker:
    """Listens for tracking packets in a background thread and keeps the newest."""

    _POLL_SECONDS = 0.2

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
        self._host = host
        self._port = port
        self._lock = threading.Lock()
        self._latest: Packet | None = None
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
            sock.bind((self._host, self._port))
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
                    data, _ = sock.recvfrom(2048)
                except socket.timeout:
                    continue
                except OSError:
                    break
                try:
                    packet = parse_packet(data)
                except ValueError:
                    continue
                with self._lock:
                    self._latest = packet
        self._running.clear()

    def latest(self) -> Packet | None:
        with self._lock:
            return self._latest

    def stop(self) -> None:
        self._running.clear()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout=2 * self._POLL_SECONDS + 1)
        self._address = None