"""Image filters and PNG, BMP, TGA and Radiance HDR encoders."""

__version__ = "0.1.0"