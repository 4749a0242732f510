## main.py
import logging
import sys
import time

import cv2
import numpy as np
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import (QApplication, QButtonGroup, QDoubleSpinBox, QFileDialog, QGridLayout,
                             QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton,
                             QRadioButton, QVBoxLayout, QWidget)

from GlobalThresholding import DEFAULT_EPSILON, apply_threshold, basic_threshold, otsu_threshold
from ImageLoader import load_gray_pixels, to_uint8
from ThresholdErrors import ThresholdingError

logger = logging.getLogger(__name__)


def cv2_to_qimage(cv_img):
    """
    Convert an OpenCV image (BGR or grayscale) to a QImage that owns its data
    """
    cv_img = np.ascontiguousarray(to_uint8(cv_img))
    if cv_img.ndim == 2:
        height, width = cv_img.shape
        return QImage(cv_img.data, width, height, width, QImage.Format_Grayscale8).copy()

    height, width, channel = cv_img.shape
    if channel == 4:
        cv_img = cv2.cvtColor(cv_img, cv2.COLOR_BGRA2BGR)
    # OpenCV stores images in BGR order, while QImage expects RGB
    rgb = np.ascontiguousarray(cv2.cvtColor(cv_img, cv2.COLOR_BGR2RGB))
    return QImage(rgb.data, width, height, 3 * width, QImage.Format_RGB888).copy()


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Global thresholding")
        self.resize(1360, 768)

        # Widgets
        self.load_btn = QPushButton("Load Image")
        self.otsu_check = QRadioButton("Otsu")
        self.basic_check = QRadioButton("Basic")
        self.otsu_check.setChecked(True)
        self.mode_gp = QButtonGroup(self)
        self.mode_gp.setExclusive(True)
        self.mode_gp.addButton(self.otsu_check)
        self.mode_gp.addButton(self.basic_check)

        self.epsilon_spinbox = QDoubleSpinBox()
        self.epsilon_spinbox.setRange(0.0, 255.0)
        self.epsilon_spinbox.setSingleStep(0.5)
        self.epsilon_spinbox.setValue(DEFAULT_EPSILON)
        self.epsilon_spinbox.setPrefix("epsilon = ")

        self.apply_btn = QPushButton("Apply")
        self.status_label = QLabel("Load an image to start")

        self.input_label = QLabel()
        self.gray_label = QLabel()
        self.output_label = QLabel()
        for label in (self.input_label, self.gray_label, self.output_label):
            label.setAlignment(Qt.AlignCenter)
            label.setMinimumSize(320, 320)

        controls = QHBoxLayout()
        for widget in (self.load_btn, self.otsu_check, self.basic_check,
                       self.epsilon_spinbox, self.apply_btn):
            controls.addWidget(widget)
        controls.addStretch()

        images = QGridLayout()
        for col, (title, label) in enumerate([("Original", self.input_label),
                                              ("Grayscale", self.gray_label),
                                              ("Thresholded", self.output_label)]):
            images.addWidget(QLabel(title), 0, col, alignment=Qt.AlignCenter)
            images.addWidget(label, 1, col)

        layout = QVBoxLayout()
        layout.addLayout(controls)
        layout.addLayout(images)
        layout.addWidget(self.status_label)
        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

        # Connect buttons
        self.load_btn.clicked.connect(self.load_image)
        self.apply_btn.clicked.connect(self.apply_global)
        self.basic_check.toggled.connect(self.epsilon_spinbox.setEnabled)
        self.epsilon_spinbox.setEnabled(False)

        # Variables to hold images
        self.original_image = None  # image as read by OpenCV
        self.gray_image = None      # grayscale pixels fed to the solvers

    def show_message(self, message):
        msg = QMessageBox()
        msg.setIcon(QMessageBox.Information)
        msg.setText(message)
        msg.setWindowTitle("Thresholding Status")
        msg.exec_()

    def set_image(self, label, image):
        pixmap = QPixmap.fromImage(cv2_to_qimage(image))
        label.setPixmap(pixmap.scaled(label.width(), label.height(),
                                      Qt.KeepAspectRatio, Qt.SmoothTransformation))

    def load_image(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Image File", "",
                                                   "Images (*.png *.jpg *.jpeg *.bmp *.tif)")
        if not file_name:
            return
        try:
            self.original_image, self.gray_image = load_gray_pixels(file_name)
        except ValueError as e:
            self.show_message(str(e))
            return

        self.set_image(self.input_label, self.original_image)
        self.set_image(self.gray_label, self.gray_image)
        # Clear output image
        self.output_label.clear()
        self.status_label.setText(file_name)

    def apply_global(self):
        if self.gray_image is None:
            self.show_message("Please load an image first")
            return

        start_time = time.perf_counter()
        try:
            if self.otsu_check.isChecked():
                threshold = otsu_threshold(self.gray_image)
                method = "Otsu's method"
            else:
                threshold = basic_threshold(self.gray_image, epsilon=self.epsilon_spinbox.value())
                method = "Basic thresholding"
        except ThresholdingError as e:
            self.show_message(f"Thresholding failed: {e}")
            return
        elapsed = time.perf_counter() - start_time

        self.set_image(self.output_label, apply_threshold(self.gray_image, threshold))
        self.status_label.setText(f"{method}: threshold = {threshold} ({elapsed:.4f} s)")
        logger.info("%s: threshold = %d", method, threshold)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())
