import pytest

from raytracer.color import Color
from raytracer.pixel import Pixel
from raytracer.ppmwriter import PpmWriter


def _read(path):
    return path.read_text()


def test_header_and_blank_image(tmp_path):
    out = tmp_path / "img.ppm"
    PpmWriter(2, 1, str(out)).save()
    assert _read(out) == "P3 2 1 255 \n0 0 0 0 0 0 "


def test_rows_are_flipped(tmp_path):
    out = tmp_path / "img.ppm"
    writer = PpmWriter(1, 2)
    writer.write(Pixel(0, 0, Color(1, 1, 1)))
    writer.save(str(out))
    assert _read(out) == "P3 1 2 255 \n0 0 0 255 255 255 "
    assert writer.file == str(out)


def test_values_are_clamped(tmp_path):
    out = tmp_path / "img.ppm"
    writer = PpmWriter(1, 1, str(out))
    writer.write(Pixel(0, 0, Color(-1, 2, float("nan"))))
    writer.save()
    assert _read(out).split()[4:] == ["0", "255", "0"]


def test_line_wrapping(tmp_path):
    out = tmp_path / "img.ppm"
    PpmWriter(7, 1, str(out)).save()
    lines = _read(out).split("\n")
    assert len(lines) == 3
    assert len(lines[1].split()) == 19
    assert len(lines[2].split()) == 2


def test_default_file_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    writer = PpmWriter(1, 1)
    writer.save()
    assert writer.file == "untitled.ppm"
    assert (tmp_path / "untitled.ppm").read_text() == "P3 1 1 255 \n0 0 0 "


def test_out_of_range_pixel():
    writer = PpmWriter(2, 2)
    with pytest.raises(IndexError):
        writer.write(Pixel(0, 2))
    with pytest.raises(IndexError):
        writer.write(Pixel(2, 0))