# docusafe/utils/files.py
import os
from pathlib import Path
from typing import List, Tuple
from uuid import uuid4
from fastapi import UploadFile
from .logging import service_logger

def write_file(file_path: Path, data: bytes) -> Path:
    """Write bytes through a temporary sibling so readers never see a partial file"""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = file_path.with_name(f".{file_path.name}.{uuid4().hex}.tmp")
    with temp_path.open("wb") as buffer:
        buffer.write(data)
    os.replace(temp_path, file_path)
    return file_path

def delete_file(file_path: Path) -> bool:
    """Delete a file if it exists, returning whether something was removed"""
    try:
        if file_path.exists():
            file_path.unlink()
            return True
    except OSError as e:
        service_logger.error(f"Error deleting file {file_path}: {e}")
    return False

def remove_empty_dir(directory: Path) -> None:
    """Remove a directory only if nothing is left in it"""
    try:
        if directory.exists() and not any(directory.iterdir()):
            directory.rmdir()
    except OSError as e:
        service_logger.warning(f"Could not remove directory {directory}: {e}")

def get_relative_path(absolute_path: Path, base_path: Path) -> str:
    """Convert absolute path to relative path for database storage"""
    absolute_path = Path(absolute_path).absolute()
    base_path = Path(base_path).absolute()
    return absolute_path.relative_to(base_path).as_posix()

async def read_upload_files(files: List[UploadFile]) -> Tuple[List[bytes], List[str]]:
    """Read uploaded page files fully into memory, keeping their order"""
    payloads = []
    filenames = []
    for idx, upload_file in enumerate(files):
        payloads.append(await upload_file.read())
        filenames.append(upload_file.filename or f"page-{idx}")
    return payloads, filenames
