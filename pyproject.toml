[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelkit"
version = "0.1.0"
description = "Pure-Python image filters and PNG, BMP, TGA and Radiance HDR encoders."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "image",
    "png",
    "bmp",
    "tga",
    "hdr",
    "deflate",
    "zlib",
    "sobel",
    "gaussian-blur",
    "sharpen",
    "emboss",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pixelkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
