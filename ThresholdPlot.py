import cv2
import matplotlib.pyplot as plt

from ImageLoader import to_uint8


def plot_thresholding(original, gray, binary, title="Global thresholding", threshold=None):
    """
    Original, grayscale and thresholded images side by side.
    Returns the figure so callers can save or show it.
    """
    original = to_uint8(original)
    if original.ndim == 3:
        # OpenCV keeps colour images in BGR order
        code = cv2.COLOR_BGRA2RGBA if original.shape[2] == 4 else cv2.COLOR_BGR2RGB
        original = cv2.cvtColor(original, code)

    fig = plt.figure(figsize=(15, 5))
    fig.suptitle(title)

    panels = [
        (original, 'Original Image'),
        (gray, 'Grayscale Image'),
        (binary, 'Thresholded Image' if threshold is None else f'Threshold = {threshold}'),
    ]
    for i, (image, label) in enumerate(panels, start=1):
        ax = fig.add_subplot(1, 3, i)
        ax.imshow(image, cmap='gray', vmin=0, vmax=255)
        ax.set_title(label)
        ax.axis('off')

    fig.tight_layout()
    return fig


def show_thresholding(original, gray, binary, title="Global thresholding", threshold=None):
    plot_thresholding(original, gray, binary, title=title, threshold=threshold)
    plt.show()
