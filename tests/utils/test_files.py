# tests/utils/test_files.py
import io

import pytest
from fastapi import UploadFile

from docusafe.utils.files import write_file, delete_file, remove_empty_dir, get_relative_path, read_upload_files


def test_write_file_creates_directories(temp_storage_dir):
    target = temp_storage_dir / "images" / "abc" / "page_0000.jpg"

    write_file(target, b"jpeg bytes")

    assert target.read_bytes() == b"jpeg bytes"
    assert [p.name for p in target.parent.iterdir()] == ["page_0000.jpg"]


def test_delete_file(temp_storage_dir):
    target = write_file(temp_storage_dir / "gone.jpg", b"x")

    assert delete_file(target) is True
    assert delete_file(target) is False


def test_remove_empty_dir_keeps_content(temp_storage_dir):
    folder = temp_storage_dir / "doc"
    write_file(folder / "page.jpg", b"x")

    remove_empty_dir(folder)
    assert folder.exists()

    delete_file(folder / "page.jpg")
    remove_empty_dir(folder)
    assert not folder.exists()


def test_get_relative_path(temp_storage_dir):
    path = temp_storage_dir / "images" / "abc" / "page_0001.jpg"
    assert get_relative_path(path, temp_storage_dir / "images") == "abc/page_0001.jpg"


@pytest.mark.asyncio
async def test_read_upload_files_keeps_order():
    files = [
        UploadFile(filename="b.png", file=io.BytesIO(b"second")),
        UploadFile(filename=None, file=io.BytesIO(b"third")),
    ]

    payloads, filenames = await read_upload_files(files)

    assert payloads == [b"second", b"third"]
    assert filenames == ["b.png", "page-1"]
