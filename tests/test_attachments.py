"""Tests for the attachment file store."""

import pytest

from tokobook.domain.errors import ValidationError
from tokobook.storage.attachments import AttachmentStore, UploadedFile


def _jpeg(name="receipt.jpg", size=10):
    return UploadedFile(filename=name, content_type="image/jpeg", data=b"x" * size)


def test_save_returns_public_paths(attachment_store, upload_dir):
    paths = attachment_store.save(
        "12", [_jpeg("nota 1.jpg"), UploadedFile("b.png", "image/png", b"png")]
    )

    assert paths == ["/uploads/expenses/12/nota_1.jpg", "/uploads/expenses/12/b.png"]
    assert (upload_dir / "12" / "nota_1.jpg").read_bytes() == b"x" * 10


def test_save_drops_directory_components(attachment_store, upload_dir):
    paths = attachment_store.save("12", [_jpeg("../../evil.jpg")])
    assert paths == ["/uploads/expenses/12/evil.jpg"]
    assert (upload_dir / "12" / "evil.jpg").exists()


def test_save_rejects_bad_folder(attachment_store):
    with pytest.raises(ValidationError):
        attachment_store.save("../x", [_jpeg()])


def test_validate_requires_files(attachment_store):
    with pytest.raises(ValidationError, match="No files uploaded"):
        attachment_store.validate([])


def test_validate_rejects_other_types(attachment_store):
    with pytest.raises(ValidationError, match="Only JPEG and PNG"):
        attachment_store.validate([UploadedFile("a.gif", "image/gif", b"gif")])


def test_validate_rejects_large_files(upload_dir):
    store = AttachmentStore(upload_dir, max_bytes=100)
    with pytest.raises(ValidationError, match="File size exceeds"):
        store.validate([_jpeg(size=101)])
    store.validate([_jpeg(size=100)])


def test_validate_rejects_too_many_files(upload_dir):
    store = AttachmentStore(upload_dir, max_files=2)
    with pytest.raises(ValidationError, match="Too many files"):
        store.validate([_jpeg("a.jpg"), _jpeg("b.jpg"), _jpeg("c.jpg")])


def test_nothing_written_when_validation_fails(attachment_store, upload_dir):
    with pytest.raises(ValidationError):
        attachment_store.save("5", [_jpeg(), UploadedFile("a.gif", "image/gif", b"gif")])
    assert not (upload_dir / "5").exists()


def test_local_path(attachment_store, upload_dir):
    path = attachment_store.local_path("/uploads/expenses/3/a.jpg")
    assert path == (upload_dir / "3" / "a.jpg").resolve()


@pytest.mark.parametrize(
    "public_path",
    ["", "/etc/passwd", "/uploads/expenses/../secret.txt", "/uploads/expenses/"],
)
def test_local_path_rejects_outside_paths(attachment_store, public_path):
    with pytest.raises(ValidationError, match="Invalid image path"):
        attachment_store.local_path(public_path)


def test_delete_file(attachment_store, upload_dir):
    (path,) = attachment_store.save("3", [_jpeg("a.jpg")])
    assert attachment_store.delete_file(path) is True
    assert not (upload_dir / "3" / "a.jpg").exists()


def test_delete_missing_file(attachment_store):
    assert attachment_store.delete_file("/uploads/expenses/3/missing.jpg") is False


def test_delete_folder(attachment_store, upload_dir):
    attachment_store.save("4", [_jpeg("a.jpg"), _jpeg("b.jpg")])
    attachment_store.delete_folder("4")
    assert not (upload_dir / "4").exists()


def test_delete_folder_is_best_effort(attachment_store):
    attachment_store.delete_folder("does-not-exist")
    attachment_store.delete_folder("../invalid")
