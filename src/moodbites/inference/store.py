"""Read classifier model blobs from a local directory."""

from pathlib import Path

from moodbites.config import MODEL_DIR, MODEL_FILES
from moodbites.errors import ModelLoadError


class ModelStore:
    """Supply model bytes by logical name (gender, age, emotion)."""

    def __init__(
        self,
        directory: str | Path | None = None,
        files: dict[str, str] | None = None,
    ) -> None:
        self.directory = Path(directory or MODEL_DIR)
        self.files = files or MODEL_FILES

    def path(self, name: str) -> Path:
        """Return the file path for a model name."""
        try:
            return self.directory / self.files[name]
        except KeyError:
            raise ModelLoadError(f"Unknown model {name!r}") from None

    def read(self, name: str) -> bytes:
        """Read a model file.

        Raises:
            ModelLoadError: If the name is unknown or the file cannot be read.
        """
        path = self.path(name)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ModelLoadError(f"Cannot read model {name!r} from {path}: {exc}") from exc
