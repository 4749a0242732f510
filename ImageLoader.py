import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def read_image(image_path):
    img = cv2.imread(str(image_path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError(f"Failed to load image from {image_path}")
    return img


def to_uint8(image):
    """Bring an 8- or 16-bit OpenCV image down to 8 bits per channel."""
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.uint16:
        # keep the high byte: 65535 -> 255, 25600 -> 100
        return (image >> 8).astype(np.uint8)
    raise ValueError(f"Unsupported image depth {image.dtype}")


def to_grayscale(image):
    """
    Convert an OpenCV image to a single 8-bit gray channel.
    :param image: BGR, BGRA or already grayscale array, 8 or 16 bits deep
    :return: 2-D uint8 array
    """
    image = to_uint8(image)
    if image.ndim == 2:
        return image
    elif image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    elif image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    elif image.ndim == 3 and image.shape[2] == 1:
        return image[:, :, 0]
    raise ValueError(f"Unsupported image shape {image.shape}")


def load_gray_pixels(image_path):
    """Read an image file and return (original image, grayscale pixels), both 8-bit."""
    original = to_uint8(read_image(image_path))
    gray = to_grayscale(original)
    logger.debug("Loaded %s: %dx%d", image_path, gray.shape[1], gray.shape[0])
    return original, gray
