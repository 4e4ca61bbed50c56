import logging
import re
from pathlib import Path

from heartlink.errors import PayloadTooLarge, UnsupportedMediaType
from heartlink.utils.helpers import generate_token

logger = logging.getLogger(__name__)

FILENAME_TOKEN_SIZE = 10
CHUNK_SIZE = 64 * 1024
SAFE_EXTENSION = re.compile(r"[A-Za-z0-9]{1,16}")


def _extension(filename):
    """Extension of the client-supplied filename, kept only if it is plain alphanumeric."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    _, dot, suffix = name.rpartition(".")
    if not dot or not SAFE_EXTENSION.fullmatch(suffix):
        return ""
    return f".{suffix}"


def is_audio(file):
    return (file.mimetype or "").startswith("audio/")


class AudioUploadStore:
    """Writes uploaded audio files into the publicly served uploads directory."""

    def __init__(self, uploads_dir, max_bytes):
        self.uploads_dir = Path(uploads_dir)
        self.max_bytes = max_bytes

    def path_for(self, filename):
        return self.uploads_dir / filename

    def store(self, file):
        """Validate and save a werkzeug FileStorage. Returns the generated filename."""
        if not is_audio(file):
            raise UnsupportedMediaType()

        data = bytearray()
        while True:
            chunk = file.stream.read(CHUNK_SIZE)
            if not chunk:
                break
            data.extend(chunk)
            if len(data) > self.max_bytes:
                raise PayloadTooLarge(f"File too large (max {self.max_bytes // (1024 * 1024)} MB)")

        filename = f"{generate_token(FILENAME_TOKEN_SIZE)}{_extension(file.filename)}"
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.path_for(filename).write_bytes(bytes(data))
        logger.info("Stored upload %s (%d bytes, %s)", filename, len(data), file.mimetype)
        return filename
