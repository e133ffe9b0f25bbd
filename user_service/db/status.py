from __future__ import annotations

from threading import Event


class StoreStatus:
    """Connectivity flag for a store, written by the connect worker and read by handlers."""

    def __init__(self, connected: bool = False) -> None:
        self._connected = Event()
        if connected:
            self._connected.set()

    @property
    def connected(self) -> bool:
        return self._connected.is_set()

    def mark_connected(self) -> None:
        self._connected.set()

    def mark_disconnected(self) -> None:
        self._connected.clear()
