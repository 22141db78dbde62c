"""Attachment file store.

Files live under ``<root>/<folder_id>/<filename>`` and are referenced from
expenses by their public path ``/uploads/expenses/<folder_id>/<filename>``.
Writes and deletes are not coordinated with the database: a stored path may
point at a missing file and a file may exist without being referenced.
"""

import re
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from tokobook.config import DEFAULT_ALLOWED_TYPES, DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_MAX_UPLOAD_FILES
from tokobook.domain.errors import ValidationError
from tokobook.logging import get_logger

LOG = get_logger("attachments")

PUBLIC_PREFIX = "/uploads/expenses"

_FOLDER_ID = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class UploadedFile:
    """File received from a client."""

    filename: str
    content_type: str
    data: bytes


def _safe_filename(filename: str) -> str:
    # Drop any directory part a client may send, then replace whitespace
    name = PurePosixPath(filename.replace("\\", "/")).name
    name = re.sub(r"\s", "_", name)
    if name in ("", ".", ".."):
        raise ValidationError(f"Invalid file name: '{filename}'")
    return name


class AttachmentStore:
    """Stores uploaded receipt photos per expense folder."""

    def __init__(
        self,
        root: Path | str,
        max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        max_files: int = DEFAULT_MAX_UPLOAD_FILES,
        allowed_types: tuple[str, ...] = DEFAULT_ALLOWED_TYPES,
    ):
        self.root = Path(root)
        self.max_bytes = max_bytes
        self.max_files = max_files
        self.allowed_types = allowed_types

    def _folder(self, folder_id: str) -> Path:
        folder_id = str(folder_id).strip()
        if not _FOLDER_ID.match(folder_id):
            raise ValidationError(f"Invalid folder ID: '{folder_id}'")
        return self.root / folder_id

    def validate(self, files: list[UploadedFile]) -> None:
        """Check count, type and size limits before anything is written.

        Raises:
            ValidationError: If any limit is violated
        """
        if not files:
            raise ValidationError("No files uploaded.")
        if len(files) > self.max_files:
            raise ValidationError(f"Too many files: at most {self.max_files} files can be uploaded at once.")
        for upload in files:
            if upload.content_type not in self.allowed_types:
                raise ValidationError(
                    f"File type not allowed: {upload.filename}. Only JPEG and PNG are allowed."
                )
            if len(upload.data) > self.max_bytes:
                limit_mb = self.max_bytes / (1024 * 1024)
                raise ValidationError(f"File size exceeds {limit_mb:g}MB for {upload.filename}.")

    def save(self, folder_id: str, files: list[UploadedFile]) -> list[str]:
        """Write files into a folder.

        Args:
            folder_id: Folder name, normally the expense ID
            files: Files to store; an existing file with the same name is overwritten

        Returns:
            Public paths of the stored files, in input order
        """
        folder = self._folder(folder_id)
        self.validate(files)
        folder.mkdir(parents=True, exist_ok=True)

        paths = []
        for upload in files:
            filename = _safe_filename(upload.filename)
            (folder / filename).write_bytes(upload.data)
            paths.append(f"{PUBLIC_PREFIX}/{folder.name}/{filename}")

        LOG.info("Stored %d file(s) in folder %s", len(paths), folder.name)
        return paths

    def local_path(self, public_path: str) -> Path:
        """Map a public path to its file on disk.

        Raises:
            ValidationError: If the path is outside the uploads area
        """
        prefix = PUBLIC_PREFIX + "/"
        if not public_path or not public_path.startswith(prefix):
            raise ValidationError("Invalid image path.")

        candidate = (self.root / public_path[len(prefix):]).resolve()
        root = self.root.resolve()
        if root not in candidate.parents:
            raise ValidationError("Invalid image path.")
        return candidate

    def delete_file(self, public_path: str) -> bool:
        """Delete one stored file.

        Returns:
            True if a file was removed, False if it was already missing

        Raises:
            ValidationError: If the path is outside the uploads area
            OSError: If the file exists but cannot be removed
        """
        path = self.local_path(public_path)
        try:
            path.unlink()
        except FileNotFoundError:
            LOG.warning("File not found on disk, continuing: %s", path)
            return False
        return True

    def delete_folder(self, folder_id: str) -> None:
        """Remove a folder and everything in it; failures are only logged."""
        try:
            folder = self._folder(folder_id)
            shutil.rmtree(folder)
        except FileNotFoundError:
            return
        except (OSError, ValidationError) as e:
            LOG.warning("Failed to delete attachment folder %s: %s", folder_id, e)
