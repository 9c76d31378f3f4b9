"""Path building and saving of filtered images as PNG."""

from __future__ import annotations

import os
import sys
import time

from pixelkit.image import RgbImage
from pixelkit.png import write_png

_INPUT_DIR = "../inputImages"
_OUTPUT_DIR = "../outputImages"


def build_paths(input_filename: str, output_filename: str) -> tuple[str, str]:
    """Return the input and output paths for the given file names."""
    return f"{_INPUT_DIR}/{input_filename}", f"{_OUTPUT_DIR}/{output_filename}"


def save_image(output_path, image: RgbImage) -> None:
    """Write ``image`` to ``output_path`` as a PNG file and report it."""
    write_png(
        output_path,
        image.width,
        image.height,
        RgbImage.CHANNELS,
        image.data,
        image.width * RgbImage.CHANNELS,
    )
    print(f"Image saved to {os.fspath(output_path)}")


def finalize_and_save(filter_name: str, output_path, image: RgbImage, start: float) -> float:
    """Report the processor time since ``start`` and save ``image``.

    ``start`` is a value of :func:`time.process_time`.  A failed save is
    reported on standard error.  Returns the elapsed seconds.
    """
    elapsed = time.process_time() - start
    print(f"{filter_name} took {elapsed:.4f} seconds")
    try:
        save_image(output_path, image)
    except OSError:
        print(f"Error saving image {os.fspath(output_path)}", file=sys.stderr)
    return elapsed