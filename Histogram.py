import logging

import numpy as np

from ThresholdErrors import InvalidInputError

logger = logging.getLogger(__name__)

# pixel intensities range from 0 to 255, inclusive
RADIX = 256


def validate_pixels(pixels):
    """
    Turn a pixel grid into a 2-D integer numpy array.
    :param pixels: numpy array or nested lists of intensities, shape (height, width)
    :return: the grid as an int64 array
    """
    try:
        grid = np.asarray(pixels)
    except ValueError as e:
        # ragged nested lists
        raise InvalidInputError(f"Malformed pixel grid: {e}") from e

    if grid.ndim != 2:
        raise InvalidInputError(f"Pixel grid must be 2-D, got {grid.ndim} dimension(s)")
    if grid.size == 0:
        raise InvalidInputError(f"Pixel grid is empty (shape {grid.shape})")
    if grid.dtype == np.bool_ or not np.issubdtype(grid.dtype, np.integer):
        raise InvalidInputError(f"Pixel intensities must be integers, got dtype {grid.dtype}")

    low, high = grid.min(), grid.max()
    if low < 0 or high >= RADIX:
        raise InvalidInputError(
            f"Pixel intensities must lie in [0, {RADIX - 1}], found range [{low}, {high}]"
        )
    return grid.astype(np.int64, copy=False)


def build_histogram(pixels):
    """Count how many pixels have each intensity; the counts sum to width * height."""
    grid = validate_pixels(pixels)
    histogram = np.bincount(grid.ravel(), minlength=RADIX)
    logger.debug("Histogram built for %dx%d grid, %d distinct intensities",
                 grid.shape[0], grid.shape[1], np.count_nonzero(histogram))
    return histogram


def sum_intensities(histogram):
    return int(np.dot(np.arange(len(histogram), dtype=np.int64), histogram))


def mean_intensity(pixels):
    grid = validate_pixels(pixels)
    return float(grid.mean())
