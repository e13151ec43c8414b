import errno

import pytest

from hexfilter.exceptions import FormatError, IoError
from hexfilter.models.image import Image
from hexfilter.repositories.image_repository import ImageRepository
from hexfilter.services.codec_service import CodecService
from hexfilter.services.image_service import ImageService


def test_load_sets_path(write_file):
    path = write_file("in.hphex", "HPHEX 1 1 0001 0002 0003")
    img = ImageService().load(path)
    assert img.path == path
    assert img.pixel_at(0, 0).as_tuple() == (1, 2, 3)


def test_load_missing_file(tmp_path):
    with pytest.raises(IoError) as excinfo:
        ImageRepository().load(tmp_path / "nope.hphex")
    assert excinfo.value.path == tmp_path / "nope.hphex"
    assert "nope.hphex" in str(excinfo.value)


def test_load_malformed_names_file(write_file):
    path = write_file("bad.hphex", "HPHEX 2 2 0000 0000")
    with pytest.raises(FormatError) as excinfo:
        ImageRepository().load(path)
    assert excinfo.value.path == path
    assert str(excinfo.value).startswith(str(path))


def test_save_and_reload(tmp_path, gradient):
    service = ImageService()
    out = service.save(gradient, tmp_path / "out.hphex")
    assert out == tmp_path / "out.hphex"
    assert service.load(out) == gradient


def test_save_uses_image_path(tmp_path):
    img = Image.blank(1, 2, path=tmp_path / "own.hphex")
    ImageService().save(img)
    assert (tmp_path / "own.hphex").read_bytes() == b"HPHEX 1 2 0000 0000 0000 0000 0000 0000 "


def test_save_without_path():
    with pytest.raises(ValueError):
        ImageService().save(Image.blank(1, 1))


def test_save_unwritable_destination(tmp_path, gradient):
    with pytest.raises(IoError):
        ImageService().save(gradient, tmp_path / "missing_dir" / "out.hphex")


def test_repository_uses_given_codec(write_file):
    path = write_file("big.hphex", "HPHEX 2 2" + " 0000" * 12)
    repo = ImageRepository(codec=CodecService(max_pixels=1))
    with pytest.raises(MemoryError):
        repo.load(path)


def test_create_copy_and_dimensions(gradient):
    service = ImageService()
    img = service.create_image(gradient.pixels.copy(), "x.hphex")
    assert img == gradient
    assert str(img.path) == "x.hphex"
    clone = service.copy(img)
    assert clone == img and clone.pixels is not img.pixels
    assert service.get_image_dimensions(img) == (3, 2)


def test_io_error_attributes(tmp_path):
    missing = tmp_path / "nope.hphex"
    with pytest.raises(IoError) as excinfo:
        ImageRepository().load(missing)
    err = excinfo.value
    assert err.errno == errno.ENOENT
    assert err.filename == str(missing)
    assert isinstance(err, OSError)


def test_io_error_without_errno():
    err = IoError("disk full", "out.hphex")
    assert err.errno is None
    assert err.filename == "out.hphex"
    assert str(err) == "out.hphex: disk full"
