import time
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote

from prompt_refiner.logging.logger import Log
from prompt_refiner.refinement.models import StoredFile
from prompt_refiner.submission.exceptions import UploadError
from prompt_refiner.submission.models import FileUpload


class BaseFileStorage(ABC):
    """Contract for object storage backends."""

    @abstractmethod
    def upload(self, upload: FileUpload) -> StoredFile:
        """Persist the file and return its public URL, name and MIME type.

        Raises:
            UploadError: if the file cannot be stored.
        """


def object_name(upload: FileUpload, now_ms: int, token: str) -> str:
    """Build the stored object name: {epoch_ms}-{token}-{original name}"""
    return f"{now_ms}-{token}-{Path(upload.name).name}"


class LocalFileStorage(BaseFileStorage):
    """Stores files on the local filesystem and serves them from a public base URL.

    Objects are created exclusively; an existing object is never overwritten.
    """

    def __init__(self, root: Path, public_base_url: str) -> None:
        self._root = root
        self._public_base_url = public_base_url.rstrip("/")

    def upload(self, upload: FileUpload) -> StoredFile:
        name = object_name(upload, int(time.time() * 1000), uuid.uuid4().hex[:12])
        path = self._root / name
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            with path.open("xb") as fh:
                fh.write(upload.content)
        except OSError as exc:
            raise UploadError(upload.name, str(exc)) from exc
        Log.info(f"Stored {upload.size_bytes} bytes for {upload.name} as {name}")
        return StoredFile(
            url=f"{self._public_base_url}/{quote(name)}",
            name=upload.name,
            mime_type=upload.mime_type,
        )
