import cv2
import numpy as np
import pytest

from threshold_cli import main


@pytest.fixture
def bimodal_image(tmp_path):
    pixels = np.full((10, 10), 50, dtype=np.uint8)
    pixels[:, 5:] = 200
    path = tmp_path / "bimodal.png"
    cv2.imwrite(str(path), pixels)
    return path


@pytest.fixture
def uniform_image(tmp_path):
    path = tmp_path / "uniform.png"
    cv2.imwrite(str(path), np.full((4, 4), 100, dtype=np.uint8))
    return path


def test_otsu_prints_threshold_and_timing(bimodal_image, capsys):
    assert main([str(bimodal_image)]) == 0

    out = capsys.readouterr().out
    assert "Threshold = 51" in out
    assert "Otsu's method took" in out


def test_basic_method(bimodal_image, capsys):
    assert main([str(bimodal_image), "--method", "basic", "--epsilon", "1"]) == 0

    out = capsys.readouterr().out
    assert "Threshold = 125" in out
    assert "Basic thresholding took" in out


def test_output_is_written(bimodal_image, tmp_path):
    output = tmp_path / "binary.png"

    assert main([str(bimodal_image), "-o", str(output)]) == 0

    binary = cv2.imread(str(output), cv2.IMREAD_GRAYSCALE)
    assert binary[:, :5].max() == 0
    assert binary[:, 5:].min() == 255


def test_missing_image_fails(tmp_path):
    assert main([str(tmp_path / "missing.png")]) == 1


def test_empty_class_policy(uniform_image, capsys):
    assert main([str(uniform_image), "-m", "basic"]) == 1
    assert main([str(uniform_image), "-m", "basic", "--on-empty-class", "keep"]) == 0
    assert "Threshold = 100" in capsys.readouterr().out


def test_negative_epsilon_fails(bimodal_image):
    assert main([str(bimodal_image), "-m", "basic", "--epsilon", "-1"]) == 1


def test_output_without_writer_fails(bimodal_image, tmp_path):
    assert main([str(bimodal_image), "-o", str(tmp_path / "binary.xyz")]) == 1
