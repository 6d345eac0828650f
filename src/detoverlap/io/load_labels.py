"""
Loading label maps from disk.

Supports numpy .npy files and label images. Images are read unchanged so
16-bit label PNGs and TIFFs keep their ids.
"""

import os

import cv2
import numpy as np
from skimage.measure import label as connected_components

from detoverlap.errors import UsageError
from detoverlap.label_map import as_single_label_map
from detoverlap.tracer import get_tracer, trace


IMAGE_EXTENSIONS = [".png", ".tif", ".tiff", ".bmp"]


@trace(label="load_label_map")
def load_label_map(path, relabel=False):
    """
    Load a label map from disk.

    Args:
        path: .npy file or label image
        relabel: treat the input as a binary mask and give each connected
            foreground component its own label

    Returns a LabelMap.

    Raises UsageError if the file is missing, unsupported or not a
    single 2D label image.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise UsageError(f"Label file not found: {path}")

    ext = os.path.splitext(path)[1].lower()

    if ext == ".npy":
        array = np.load(path, allow_pickle=False)
    elif ext in IMAGE_EXTENSIONS:
        array = _read_label_image(path)
    else:
        raise UsageError(f"Unsupported label file format: {path}")

    if relabel:
        array = relabel_connected_components(array)

    label_map = as_single_label_map(array, os.path.basename(path))

    tracer.event(f"Loaded label map: {label_map.width}x{label_map.height}, {len(label_map.labels())} labels")

    return label_map


def _read_label_image(path):
    image = cv2.imread(path, cv2.IMREAD_UNCHANGED)

    if image is None:
        raise UsageError(f"Failed to load label image: {path}")

    if image.ndim == 3:
        if image.shape[2] == 4:
            image = image[:, :, :3]
        image = colors_to_labels(image)

    return image


def colors_to_labels(image):
    """
    Fold a (H, W, 3) 8-bit BGR colour label image into one id per colour.

    Black stays background. The id is r << 16 | g << 8 | b.
    """
    if image.dtype != np.uint8:
        raise UsageError(f"colour label images must be 8-bit, got {image.dtype}")
    image = image.astype(np.uint32)
    b, g, r = image[:, :, 0], image[:, :, 1], image[:, :, 2]
    return (r << 16) | (g << 8) | b


def relabel_connected_components(array):
    """Label 8-connected foreground components of a mask, background stays 0."""
    mask = np.asarray(array) != 0
    return connected_components(mask, connectivity=2).astype(np.uint32)
