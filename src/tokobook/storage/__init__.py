"""File storage for expense attachments."""

from tokobook.storage.attachments import AttachmentStore, UploadedFile

__all__ = ["AttachmentStore", "UploadedFile"]
