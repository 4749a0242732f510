import cv2
import numpy as np
import pytest

from ImageLoader import load_gray_pixels, read_image, to_grayscale


def test_load_color_image_as_gray(tmp_path):
    bgr = np.zeros((6, 8, 3), dtype=np.uint8)
    bgr[:, 4:] = (255, 255, 255)
    path = tmp_path / "color.png"
    cv2.imwrite(str(path), bgr)

    original, gray = load_gray_pixels(path)

    assert original.shape == (6, 8, 3)
    assert gray.shape == (6, 8)
    assert gray.dtype == np.uint8
    assert gray[:, :4].max() == 0
    assert gray[:, 4:].min() == 255


def test_load_gray_image_unchanged(tmp_path):
    pixels = np.arange(48, dtype=np.uint8).reshape(6, 8)
    path = tmp_path / "gray.png"
    cv2.imwrite(str(path), pixels)

    _, gray = load_gray_pixels(str(path))

    np.testing.assert_array_equal(gray, pixels)


def test_bgra_image_is_converted():
    bgra = np.full((3, 3, 4), 255, dtype=np.uint8)

    gray = to_grayscale(bgra)

    assert gray.shape == (3, 3)
    assert gray.min() == 255


def test_sixteen_bit_image_keeps_high_byte():
    deep = np.array([[0, 1000], [30000, 65535]], dtype=np.uint16)

    gray = to_grayscale(deep)

    assert gray.dtype == np.uint8
    assert gray.tolist() == [[0, 3], [117, 255]]


def test_uniform_sixteen_bit_image_is_not_stretched():
    gray = to_grayscale(np.full((3, 3), 25600, dtype=np.uint16))

    assert gray.tolist() == [[100] * 3] * 3


def test_load_sixteen_bit_file(tmp_path):
    deep = np.zeros((2, 4), dtype=np.uint16)
    deep[:, 2:] = 65280
    path = tmp_path / "deep.png"
    cv2.imwrite(str(path), deep)

    original, gray = load_gray_pixels(path)

    assert original.dtype == np.uint8
    assert original.tolist() == [[0, 0, 255, 255]] * 2
    np.testing.assert_array_equal(gray, original)


def test_unsupported_depth():
    with pytest.raises(ValueError, match="depth"):
        to_grayscale(np.zeros((2, 2), dtype=np.float32))


def test_unsupported_shape():
    with pytest.raises(ValueError):
        to_grayscale(np.zeros((2, 2, 2), dtype=np.uint8))


def test_missing_file(tmp_path):
    with pytest.raises(ValueError, match="Failed to load image"):
        read_image(tmp_path / "nope.png")
