import argparse
import logging
import sys
import time

import cv2

from GlobalThresholding import (DEFAULT_EPSILON, DEFAULT_MAX_ITERATIONS, EMPTY_CLASS_POLICIES,
                                METHODS, apply_threshold, compute_threshold)
from ImageLoader import load_gray_pixels

logger = logging.getLogger(__name__)

METHOD_NAMES = {
    "otsu": "Otsu's method",
    "basic": "Basic thresholding",
}


def build_parser():
    argParser = argparse.ArgumentParser(
        "Global Thresholding",
        description="Finds the optimal foreground/background threshold of a grayscale image",
    )
    argParser.add_argument("image", help="Path of the image to threshold")
    argParser.add_argument(
        "-m", "--method", choices=sorted(METHODS), default="otsu", help="Thresholding algorithm"
    )
    argParser.add_argument(
        "-e",
        "--epsilon",
        type=float,
        default=DEFAULT_EPSILON,
        help="Basic thresholding stops once the threshold changes by less than this",
    )
    argParser.add_argument(
        "--max-iterations",
        type=int,
        default=DEFAULT_MAX_ITERATIONS,
        help="Upper bound on basic thresholding iterations",
    )
    argParser.add_argument(
        "--on-empty-class",
        choices=EMPTY_CLASS_POLICIES,
        default="raise",
        help="What basic thresholding does when a class ends up empty",
    )
    argParser.add_argument("-o", "--output", help="Write the thresholded image to this path")
    argParser.add_argument(
        "-s",
        "--show",
        help="Show original, grayscale and thresholded images",
        action="store_true",
        default=False,
    )
    argParser.add_argument(
        "-v", "--verbose", help="Log every step", action="store_true", default=False
    )
    return argParser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    kwargs = {}
    if args.method == "basic":
        kwargs = dict(epsilon=args.epsilon, max_iterations=args.max_iterations,
                      on_empty_class=args.on_empty_class)

    try:
        original, pixels = load_gray_pixels(args.image)

        start_time = time.perf_counter()
        threshold = compute_threshold(pixels, method=args.method, **kwargs)
        elapsed = time.perf_counter() - start_time
    except ValueError as e:
        # ThresholdingError is a ValueError, same as image loading failures
        logger.error("%s", e)
        return 1

    name = METHOD_NAMES[args.method]
    print(f"Threshold = {threshold}")
    print(f"{name} took {elapsed:.6f} seconds.")

    binary = apply_threshold(pixels, threshold)
    if args.output:
        try:
            written = cv2.imwrite(args.output, binary)
        except cv2.error as e:
            # no writer for the extension
            logger.error("Failed to write thresholded image to %s: %s", args.output, e)
            return 1
        if not written:
            logger.error("Failed to write thresholded image to %s", args.output)
            return 1
        logger.info("Thresholded image written to %s", args.output)

    if args.show:
        # only the interactive path needs a plotting backend
        from ThresholdPlot import show_thresholding
        show_thresholding(original, pixels, binary, title=name, threshold=threshold)

    return 0


if __name__ == "__main__":
    sys.exit(main())
