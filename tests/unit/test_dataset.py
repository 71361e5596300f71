import warnings

import numpy as np
import pytest
from PIL import Image

from synapsenet.core.errors import DatasetNotFoundError
from synapsenet.data.dataset import index_dataset, is_image
from synapsenet.data.images import decode_image, encode_image


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_index_follows_category_order_and_sorts_files(tmp_path):
    for name in ("b.png", "a.jpg", "c.JPEG"):
        _touch(tmp_path / "dog" / name)
    _touch(tmp_path / "cat" / "z.png")
    index = index_dataset(tmp_path, ["dog", "cat"])
    assert list(index) == ["dog", "cat"]
    assert [p.name for p in index["dog"]] == ["a.jpg", "b.png", "c.JPEG"]
    assert [p.name for p in index["cat"]] == ["z.png"]


def test_unknown_folder_and_format_warn(tmp_path):
    _touch(tmp_path / "cat" / "ok.png")
    _touch(tmp_path / "cat" / "notes.txt")
    _touch(tmp_path / "bird" / "b.png")
    with pytest.warns(UserWarning) as record:
        index = index_dataset(tmp_path, ["cat"])
    messages = " ".join(str(w.message) for w in record)
    assert "bird" in messages
    assert "notes.txt" in messages
    assert [p.name for p in index["cat"]] == ["ok.png"]


def test_empty_category_folder_is_kept(tmp_path):
    (tmp_path / "cat").mkdir()
    _touch(tmp_path / "dog" / "d.png")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        index = index_dataset(tmp_path, ["cat", "dog", "fish"])
    assert index["cat"] == []
    assert "fish" not in index


def test_files_at_root_are_ignored(tmp_path):
    _touch(tmp_path / "loose.png")
    _touch(tmp_path / "cat" / "c.png")
    index = index_dataset(tmp_path, ["cat"])
    assert [p.name for p in index["cat"]] == ["c.png"]


def test_missing_root(tmp_path):
    with pytest.raises(DatasetNotFoundError):
        index_dataset(tmp_path / "nowhere", ["cat"])


def test_is_image_is_case_insensitive(tmp_path):
    assert is_image(tmp_path / "A.PNG")
    assert not is_image(tmp_path / "a.gif")


def test_decode_image_normalises_grayscale(tmp_path):
    path = encode_image(np.array([0.0, 1.0, 0.5, 0.25]), 2, 2, tmp_path / "img.png")
    pixels = decode_image(path)
    assert pixels.shape == (4,)
    assert pixels[0] == 0.0 and pixels[1] == 1.0
    assert pixels == pytest.approx([0.0, 1.0, 0.5, 0.25], abs=1 / 255)


def test_decode_image_of_corrupt_file_is_none(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image at all")
    assert decode_image(path) is None


def test_decode_image_flattens_colour_to_one_value_per_pixel(tmp_path):
    path = tmp_path / "colour.png"
    Image.new("RGB", (3, 2), color=(255, 255, 255)).save(path)
    pixels = decode_image(path)
    assert pixels.shape == (6,)
    assert pixels == pytest.approx(np.ones(6))
