"""An append-only byte buffer for generated source."""

from __future__ import annotations


class Writer:
    """Collects generated output as bytes."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, data: str | bytes | bytearray | memoryview) -> None:
        """Append text (encoded as UTF-8) or bytes."""
        if isinstance(data, str):
            self._buffer += data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            self._buffer += data
        else:
            raise TypeError(f"cannot write {type(data).__name__} to Writer")

    def take(self) -> bytes:
        """Return everything written so far and empty the buffer."""
        data = bytes(self._buffer)
        self._buffer.clear()
        return data

    def __len__(self) -> int:
        return len(self._buffer)