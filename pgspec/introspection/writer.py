"""Default document writer backed by the local file system."""

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from pgspec.utils.logging import get_logger

if TYPE_CHECKING:
    from pgspec.introspection.layout import GeneratedDocument

__all__ = ("FileSystemWriter",)

logger = get_logger("introspection.writer")


class FileSystemWriter:
    """Write documents as UTF-8 files, creating the directory when missing."""

    __slots__ = ("encoding",)

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write(self, directory: str, documents: "Sequence[GeneratedDocument]") -> list[str]:
        target = Path(directory)
        target.mkdir(parents=True, exist_ok=True)
        written: list[str] = []
        for document in documents:
            path = target / document.path
            path.write_text(document.content, encoding=self.encoding)
            logger.debug("Wrote %s (%d characters)", path, len(document.content))
            written.append(str(path))
        return written
