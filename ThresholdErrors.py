class ThresholdingError(ValueError):
    """Base class for every error raised while computing a threshold."""


class InvalidInputError(ThresholdingError):
    """Pixel grid is empty, malformed or holds intensities outside [0, 255]."""


class InvalidArgumentError(ThresholdingError):
    """A tuning argument (epsilon, threshold, ...) has an unusable value."""


class EmptyClassError(ThresholdingError):
    """A partition step of basic thresholding left one class without pixels."""

    def __init__(self, threshold, empty_class):
        self.threshold = threshold
        self.empty_class = empty_class
        side = "above" if empty_class == 1 else "at or below"
        super().__init__(f"No pixels {side} threshold {threshold}; class mean is undefined")
