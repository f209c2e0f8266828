"""In-memory byte payload uploaded to pre-signed URLs."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FilePayload:
    """
    Fully buffered bytes destined for a single upload.

    The length is derived from the data, so it always equals the byte
    count. Emptiness is rejected by FileLoader and ObjectUploader.
    """

    data: bytes

    @property
    def length(self) -> int:
        return len(self.data)

    @classmethod
    def from_text(cls, text: str) -> "FilePayload":
        """Build a payload from a string encoded as UTF-8."""
        return cls(text.encode("utf-8"))
