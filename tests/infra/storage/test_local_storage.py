import logging
from pathlib import Path

import pytest

from src.infra.storage.keys import InvalidKeyError
from src.infra.storage.local import LocalStorage
from src.schemas.file import FileDescriptor


def make_file(content: bytes = b"fake jpeg content", **overrides: object) -> FileDescriptor:
    data: dict[str, object] = {
        "name": "Image.JPG",
        "ext": ".JPG",
        "mime": "image/jpeg",
        "buffer": content,
        "hash": "abc123",
    }
    data.update(overrides)
    return FileDescriptor.model_validate(data)


class TestLocalStorageUpload:
    async def test_upload_writes_file(
        self, local_storage: LocalStorage, temp_upload_dir: Path
    ) -> None:
        file = make_file()

        await local_storage.upload(file)

        assert (temp_upload_dir / "abc123/image.jpg").read_bytes() == b"fake jpeg content"
        assert local_storage.exists("abc123/image.jpg")

    async def test_upload_sets_url(self, local_storage: LocalStorage) -> None:
        file = make_file(path="clean")

        await local_storage.upload(file)

        assert file.url == "/static/clean/image.jpg"

    async def test_upload_overwrites_existing(
        self, local_storage: LocalStorage, temp_upload_dir: Path
    ) -> None:
        await local_storage.upload(make_file(b"old"))
        await local_storage.upload(make_file(b"new"))

        assert (temp_upload_dir / "abc123/image.jpg").read_bytes() == b"new"


class TestLocalStorageDelete:
    async def test_delete_removes_file(self, local_storage: LocalStorage) -> None:
        file = make_file()
        await local_storage.upload(file)

        await local_storage.delete(file)

        assert local_storage.exists("abc123/image.jpg") is False

    async def test_delete_missing_file_logs_warning(
        self, local_storage: LocalStorage, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            await local_storage.delete(make_file())

        assert "abc123/image.jpg" in caplog.text


class TestLocalStorageGetUrl:
    def test_get_url(self, local_storage: LocalStorage) -> None:
        url = local_storage.get_url("original/abc123.jpg")

        assert url == "/static/original/abc123.jpg"


class TestLocalStorageExists:
    def test_exists_false(self, local_storage: LocalStorage) -> None:
        assert local_storage.exists("nonexistent/file.jpg") is False


class TestLocalStorageBoundary:
    async def test_parent_path_is_rejected(
        self, local_storage: LocalStorage, temp_upload_dir: Path
    ) -> None:
        file = make_file(path="../escaped")

        with pytest.raises(InvalidKeyError):
            await local_storage.upload(file)

        assert not (temp_upload_dir.parent / "escaped").exists()
        assert file.url is None

    async def test_symlink_outside_base_dir_is_rejected(
        self, local_storage: LocalStorage, temp_upload_dir: Path, tmp_path: Path
    ) -> None:
        outside = tmp_path / "outside"
        outside.mkdir()
        (temp_upload_dir / "link").symlink_to(outside, target_is_directory=True)

        with pytest.raises(InvalidKeyError):
            await local_storage.upload(make_file(path="link"))
        with pytest.raises(InvalidKeyError):
            await local_storage.delete(make_file(path="link"))

        assert list(outside.iterdir()) == []
