import logging
import math
import numbers

import numpy as np

from Histogram import RADIX, build_histogram, mean_intensity, sum_intensities, validate_pixels
from ThresholdErrors import EmptyClassError, InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 2.0
DEFAULT_MAX_ITERATIONS = 100
EMPTY_CLASS_POLICIES = ("raise", "keep")


def otsu_threshold(pixels):
    """
    Otsu's method. Scans every candidate threshold once, keeping running
    weights and means of the background (intensities < t) and the foreground
    (intensities >= t), and returns the first t that maximises the
    between-class variance.
    :param pixels: 2-D grid of intensities in [0, 255]
    :return: threshold in [0, 255]
    """
    histogram = build_histogram(pixels)
    n_t = [int(count) for count in histogram]
    total_pixels = sum(n_t)
    sum_all = sum_intensities(histogram)

    best_variance = float("-inf")
    threshold = 0

    weight_bg = 0
    mean_bg = 0.0
    weight_fg = total_pixels
    mean_fg = sum_all / total_pixels

    t = 0
    while t < RADIX:
        diff_means = mean_fg - mean_bg
        variance = weight_bg * weight_fg * diff_means * diff_means

        # strict comparison: the first maximum wins
        if variance > best_variance:
            best_variance = variance
            threshold = t

        # empty buckets move no pixels between the classes
        while t < RADIX and n_t[t] == 0:
            t += 1
        if t == RADIX:
            break

        count = n_t[t]
        mean_bg = (mean_bg * weight_bg + count * t) / (weight_bg + count)
        remaining = weight_fg - count
        mean_fg = (mean_fg * weight_fg - count * t) / remaining if remaining else 0.0
        weight_bg += count
        weight_fg = remaining
        t += 1

    logger.debug("Otsu threshold %d (between-class variance %.3f, %d pixels)",
                 threshold, best_variance, total_pixels)
    return threshold


def basic_threshold(pixels, epsilon=DEFAULT_EPSILON, max_iterations=DEFAULT_MAX_ITERATIONS,
                    on_empty_class="raise"):
    """
    Basic global thresholding: start from the mean intensity, split the pixels
    into class 1 (> T) and class 2 (<= T) and move T to the average of the two
    class means until it changes by less than epsilon.

    on_empty_class decides what happens when a split leaves a class empty:
    "raise" raises EmptyClassError, "keep" returns the current threshold.
    """
    _check_basic_arguments(epsilon, max_iterations, on_empty_class)
    gray_image = validate_pixels(pixels)

    # intensities are non-negative, so int() floors
    threshold = int(mean_intensity(gray_image))

    for iteration in range(1, max_iterations + 1):
        class_1 = gray_image[gray_image > threshold]
        class_2 = gray_image[gray_image <= threshold]

        if class_1.size == 0 or class_2.size == 0:
            if on_empty_class == "keep":
                logger.debug("Iteration %d: empty class at threshold %d, keeping it",
                             iteration, threshold)
                return threshold
            raise EmptyClassError(threshold, 1 if class_1.size == 0 else 2)

        mean_1 = class_1.mean()
        mean_2 = class_2.mean()
        new_threshold = int((mean_1 + mean_2) / 2)
        logger.debug("Iteration %d: m1=%.3f m2=%.3f threshold %d -> %d",
                     iteration, mean_1, mean_2, threshold, new_threshold)

        # a fixed point ends the search even when epsilon is 0
        if abs(new_threshold - threshold) < epsilon or new_threshold == threshold:
            return new_threshold
        threshold = new_threshold

    logger.warning("Basic thresholding did not converge within %d iterations "
                   "(epsilon=%s); returning %d", max_iterations, epsilon, threshold)
    return threshold


def _check_basic_arguments(epsilon, max_iterations, on_empty_class):
    if isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real):
        raise InvalidArgumentError(f"epsilon must be a real number, got {epsilon!r}")
    if math.isnan(epsilon) or epsilon < 0:
        raise InvalidArgumentError(f"epsilon must be non-negative, got {epsilon}")
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, numbers.Integral) \
            or max_iterations < 1:
        raise InvalidArgumentError(f"max_iterations must be a positive integer, got {max_iterations!r}")
    if on_empty_class not in EMPTY_CLASS_POLICIES:
        raise InvalidArgumentError(
            f"on_empty_class must be one of {EMPTY_CLASS_POLICIES}, got {on_empty_class!r}"
        )


def apply_threshold(pixels, threshold):
    """Binary image: 255 (white) where intensity > threshold, 0 (black) elsewhere."""
    gray_image = validate_pixels(pixels)
    if isinstance(threshold, (bool, np.bool_)) or not isinstance(threshold, numbers.Integral):
        raise InvalidArgumentError(f"threshold must be an integer, got {threshold!r}")
    if not 0 <= threshold < RADIX:
        raise InvalidArgumentError(f"threshold must lie in [0, {RADIX - 1}], got {threshold}")

    return (gray_image > threshold).astype(np.uint8) * 255


METHODS = {
    "otsu": otsu_threshold,
    "basic": basic_threshold,
}


def compute_threshold(pixels, method="otsu", **kwargs):
    try:
        solver = METHODS[method]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown thresholding method {method!r}, expected one of {sorted(METHODS)}"
        ) from None
    return solver(pixels, **kwargs)
