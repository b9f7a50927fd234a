import base64
import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import report_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from report_toolkit.core.models import Photo, Record  # noqa: E402


# Common test fixtures
@pytest.fixture
def png_base64() -> str:
    """Base64 encoded 40x30 PNG."""
    img = Image.new("RGB", (40, 30), color="steelblue")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def record_factory():
    """Factory for records with sensible defaults."""
    def _create(record_id: str, **kwargs) -> Record:
        kwargs.setdefault("section_title", "Kitchen")
        kwargs.setdefault("item_title", f"Item {record_id}")
        return Record(id=record_id, **kwargs)
    return _create


@pytest.fixture
def photo_factory():
    """Factory for url-referenced photos."""
    def _create(photo_id: str, **kwargs) -> Photo:
        kwargs.setdefault("url", f"https://photos.example/{photo_id}.jpg")
        return Photo(id=photo_id, **kwargs)
    return _create


@pytest.fixture
def fixed_height():
    """Estimator returning per-id heights (default 300px)."""
    def _create(heights=None, default: float = 300.0):
        heights = heights or {}
        return lambda record: float(heights.get(record.id, default))
    return _create
