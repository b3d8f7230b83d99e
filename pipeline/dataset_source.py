from dataclasses import dataclass
from pathlib import Path

from pipeline.errors import ReadError


@dataclass(frozen=True)
class DatasetSource:
    """
    Raw upload: the bytes plus the filename the user picked.
    Only the filename's extension is used to decide the format.
    """

    name: str
    content: bytes

    @property
    def byte_length(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[-1].lower()

    def text(self) -> str:
        # utf-8-sig drops a leading BOM; bad bytes become U+FFFD like a browser reader
        return self.content.decode("utf-8-sig", errors="replace")

    @classmethod
    def from_path(cls, path) -> "DatasetSource":
        p = Path(path)
        try:
            content = p.read_bytes()
        except OSError as e:
            raise ReadError(f"Error reading file {p.name}: {e}") from e
        return cls(name=p.name, content=content)
