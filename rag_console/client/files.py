"""Files selected for upload.

Content is always submitted as text. Bytes that are not valid UTF-8 are
replaced, so binary files are uploaded lossily.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PendingFile(Protocol):
    """A user-selected file awaiting upload."""

    @property
    def name(self) -> str: ...

    async def read_text(self) -> str: ...


def decode_text(data: bytes) -> str:
    """Decode file bytes as UTF-8, replacing undecodable sequences."""
    return data.decode("utf-8", errors="replace")


class BufferedFile:
    """File whose bytes were captured at selection time (browser uploads)."""

    def __init__(self, name: str, data: bytes) -> None:
        self._name = name
        self._data = data

    @property
    def name(self) -> str:
        return self._name

    async def read_text(self) -> str:
        return decode_text(self._data)

    def __repr__(self) -> str:
        return f"BufferedFile(name={self._name!r}, size={len(self._data)})"
