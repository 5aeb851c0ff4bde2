import pytest

from raytracer.color import Color
from raytracer.ppm import format_ppm, write_ppm


def _parse(text):
    tokens = text.split()
    assert tokens[0] == "P3"
    width, height, max_value = (int(t) for t in tokens[1:4])
    values = [int(t) for t in tokens[4:]]
    pixels = [Color(*values[i:i + 3]) for i in range(0, len(values), 3)]
    return width, height, max_value, pixels


def test_single_pixel_exact_text():
    assert format_ppm([Color(1, 2, 3)], 1, 1) == "P3\n1 1\n255\n1 2 3 \n"


def test_header():
    text = format_ppm([Color(0, 0, 0), Color(9, 9, 9)], 2, 1)
    assert text.startswith("P3\n2 1\n255\n")


def test_round_trip():
    pixels = [Color(r, g, b) for r, g, b in [(0, 10, 20), (255, 128, 1), (7, 8, 9),
                                             (30, 40, 50), (60, 70, 80), (90, 100, 110)]]
    width, height, max_value, parsed = _parse(format_ppm(pixels, 3, 2))
    assert (width, height, max_value) == (3, 2, 255)
    assert parsed == pixels


def test_one_line_per_row():
    pixels = [Color(1, 1, 1)] * 6
    text = format_ppm(pixels, 2, 3)
    assert len(text.splitlines()) == 3 + 3


def test_too_few_pixels_raises():
    with pytest.raises(ValueError):
        format_ppm([Color(1, 1, 1)], 2, 2)


def test_negative_size_raises():
    with pytest.raises(ValueError):
        format_ppm([], -1, 2)


def test_write_matches_format(tmp_path):
    pixels = [Color(5, 6, 7), Color(8, 9, 10)]
    path = tmp_path / "out.ppm"
    write_ppm(path, pixels, 2, 1)
    data = path.read_bytes()
    assert data.decode("ascii") == format_ppm(pixels, 2, 1)
    assert b"\r" not in data


def test_write_to_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        write_ppm(tmp_path / "missing" / "out.ppm", [Color(1, 2, 3)], 1, 1)