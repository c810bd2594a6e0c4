# tests/conftest.py
import asyncio
import io
import os
import shutil
import tempfile
from pathlib import Path

# Keep the application's own engine and storage away from the working tree
_TEST_STORAGE = tempfile.mkdtemp(prefix="docusafe-test-")
os.environ.setdefault("STORAGE_PATH", _TEST_STORAGE)
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docusafe.main import app
from docusafe.database import Base, get_db
from docusafe.config import settings
from docusafe.services.capture import ImageScan
from docusafe.services.documents import document_service
from docusafe.services.workflow import ScanWorkflow, get_workflow

SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

# Distinct widths make capture order visible after a JPEG round trip
PAGE_SIZES = [(100, 140), (120, 160), (140, 180)]
PAGE_COLORS = ["red", "green", "blue"]


def make_page_image(size=(100, 140), color="white", mode="RGB") -> Image.Image:
    return Image.new(mode, size, color=color)


def image_bytes(image: Image.Image, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


class FailingScan:
    """Scan whose page at `fail_at` cannot be read"""

    def __init__(self, page_count: int, fail_at: int):
        self._page_count = page_count
        self.fail_at = fail_at

    @property
    def page_count(self) -> int:
        return self._page_count

    def image_of_page(self, index: int) -> Image.Image:
        if index == self.fail_at:
            raise OSError("camera buffer released")
        return make_page_image()


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Creates a new database session for a test"""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def temp_storage_dir(tmp_path):
    """Per-test storage directory"""
    (tmp_path / "images").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Point page storage at the test directory"""
    original_storage = settings.STORAGE_PATH
    original_images = settings.IMAGES_PATH

    settings.STORAGE_PATH = temp_storage_dir
    settings.IMAGES_PATH = temp_storage_dir / "images"

    yield

    settings.STORAGE_PATH = original_storage
    settings.IMAGES_PATH = original_images


@pytest.fixture
def workflow():
    return ScanWorkflow(default_name="New Document")


@pytest.fixture
def client(db_session, workflow):
    """Test client using the test database and a fresh workflow"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_workflow] = lambda: workflow
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def page_images():
    """Three distinguishable page images in capture order"""
    return [make_page_image(size, color) for size, color in zip(PAGE_SIZES, PAGE_COLORS)]


@pytest.fixture
def page_files(page_images):
    """The sample pages as multipart upload entries"""
    return [
        ("files", (f"page{idx}.png", image_bytes(image), "image/png"))
        for idx, image in enumerate(page_images)
    ]


@pytest.fixture
def sample_document(db_session, page_images):
    """A persisted three-page document"""
    return asyncio.run(
        document_service.create_document(db_session, ImageScan(page_images), "Test Document")
    )


@pytest.fixture(scope="session", autouse=True)
def cleanup_test_storage():
    """Remove the storage directory the application module created"""
    yield
    shutil.rmtree(_TEST_STORAGE, ignore_errors=True)
    for file in ["docusafe.db", "test-docusafe.db"]:
        if Path(file).exists():
            os.remove(file)
