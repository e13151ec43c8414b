import numpy as np
import pytest

from hexfilter.models.image import Image

MAX = 0xFFFF


def make_image(rows) -> Image:
    """Build an Image from nested [[(r, g, b), ...], ...] rows."""
    return Image(pixels=np.array(rows, dtype=np.uint16).reshape(len(rows), -1, 3))


def grey(rows) -> Image:
    """Image whose three channels all equal the given 2-D values."""
    values = np.array(rows, dtype=np.uint16)
    return Image(pixels=np.repeat(values[:, :, None], 3, axis=2))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("HPHEX_MAX_PIXELS", raising=False)
    monkeypatch.delenv("HPHEX_LOG_LEVEL", raising=False)


@pytest.fixture
def center_spike() -> Image:
    """3x3 black image with a single full-white centre pixel."""
    return grey([[0, 0, 0], [0, MAX, 0], [0, 0, 0]])


@pytest.fixture
def gradient() -> Image:
    return make_image([
        [(0x0010, 0x0200, 0x3000), (0x0400, 0x0050, 0x6000)],
        [(0x7000, 0x0800, 0x0090), (0xa000, 0xb000, 0x0c00)],
        [(0xffff, 0x0000, 0x1234), (0xabcd, 0xef01, 0x0f0f)],
    ])


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, content):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("ascii")
        path.write_bytes(content)
        return path
    return _write
