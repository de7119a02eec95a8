# utils/file_store.py
import logging
import os
import re
import time
import uuid
from typing import BinaryIO, Optional

from utils.errors import InvalidArgument, NotFound, StorageError

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"

# <field>-<epoch millis>-<uuid4 hex>[.ext], nothing else is ever resolved to a path
STORED_NAME_RE = re.compile(r"^[A-Za-z0-9_]+-\d{13}-[0-9a-f]{32}(\.[a-z0-9]{1,10})?$")
FIELD_RE = re.compile(r"^[A-Za-z0-9_]+$")
EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


def is_stored_name(name: Optional[str]) -> bool:
    return bool(name) and STORED_NAME_RE.match(name) is not None


class FileStore:
    """
    Local-disk document store.

    Callers only ever see the generated stored name; the upload root stays
    private to this class so another backend can replace it.
    """

    def __init__(self, root: str, max_bytes: int = 5 * 1024 * 1024,
                 allowed_types=(PDF_MIMETYPE,)):
        self.root = os.path.abspath(root)
        self.max_bytes = max_bytes
        self.allowed_types = tuple(allowed_types)
        os.makedirs(self.root, exist_ok=True)
        os.chmod(self.root, 0o755)
        logger.info("File store ready at %s", self.root)

    def check(self, original_filename: str, size: int, content_type: Optional[str]):
        """Raise InvalidArgument if the upload would be refused by store()."""
        if content_type not in self.allowed_types:
            raise InvalidArgument(f"Only PDF files are allowed ({original_filename or 'unnamed file'})")
        if size > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            raise InvalidArgument(f"File too large ({original_filename}); limit is {limit_mb:g}MB")

    def store(self, field_name: str, original_filename: str, data: bytes,
              content_type: Optional[str]) -> str:
        self.check(original_filename, len(data), content_type)
        if not FIELD_RE.match(field_name or ""):
            raise InvalidArgument("Invalid upload field")

        stored_name = self._generate_name(field_name, original_filename)
        path = self._path(stored_name)
        try:
            # "xb" refuses to overwrite, so two writers can never share a name
            with open(path, "xb") as fh:
                fh.write(data)
        except OSError as e:
            logger.exception("Failed to write upload %s for field %s", stored_name, field_name)
            raise StorageError("Failed to store file") from e

        logger.info("Stored %s (%d bytes) for field %s", stored_name, len(data), field_name)
        return stored_name

    def open(self, stored_name: str) -> BinaryIO:
        if not is_stored_name(stored_name):
            raise NotFound("File not found")
        try:
            return open(self._path(stored_name), "rb")
        except FileNotFoundError:
            raise NotFound("File not found")

    def exists(self, stored_name: str) -> bool:
        return is_stored_name(stored_name) and os.path.isfile(self._path(stored_name))

    def remove(self, stored_name: Optional[str]):
        if not is_stored_name(stored_name):
            return
        try:
            os.remove(self._path(stored_name))
            logger.info("Removed %s", stored_name)
        except FileNotFoundError:
            pass
        except OSError:
            logger.exception("Failed to remove %s", stored_name)

    def _generate_name(self, field_name: str, original_filename: str) -> str:
        ext = os.path.splitext(original_filename or "")[1].lower()
        if not EXTENSION_RE.match(ext):
            ext = ""
        millis = int(time.time() * 1000)
        return f"{field_name}-{millis:013d}-{uuid.uuid4().hex}{ext}"

    def _path(self, stored_name: str) -> str:
        return os.path.join(self.root, stored_name)
