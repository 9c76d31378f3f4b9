# pixelkit

Image filters and image-file encoders written in plain Python, with no
third-party dependencies.

## Encoders

Every encoder takes raw 8-bit pixel data (floating-point data for HDR) laid
out left to right, top to bottom, with `comp` interleaved channels per pixel
(1 = grey, 2 = grey + alpha, 3 = RGB, 4 = RGBA). The `encode_*` functions
return the file's bytes; the `write_*` functions write them to a path.
Invalid sizes, channel counts or too little pixel data raise `ValueError`.

| Format | Encode | Write |
| --- | --- | --- |
| PNG | `pixelkit.png.encode_png` | `pixelkit.png.write_png` |
| BMP | `pixelkit.bmptga.encode_bmp` | `pixelkit.bmptga.write_bmp` |
| TGA | `pixelkit.bmptga.encode_tga` | `pixelkit.bmptga.write_tga` |
| Radiance HDR | `pixelkit.hdr.encode_hdr` | `pixelkit.hdr.write_hdr` |

Behaviour shared between writers is set through a
`pixelkit.bmptga.WriteOptions` value passed as `options` (the defaults are
used when it is omitted):

- `flip_vertically` (default `False`) writes the rows bottom to top.
- `png_compression_level` (default `8`) is passed to the compressor as its
  quality.
- `force_png_filter` (default `-1`) picks PNG filter 0 to 4 for every row;
  `-1`, or any value of 5 or more, chooses the filter per row.
- `tga_with_rle` (default `True`) run-length encodes TGA files.

```python
from pixelkit.bmptga import WriteOptions, encode_bmp
from pixelkit.png import encode_png

# A 2x1 RGB image: one red pixel, one blue pixel.
pixels = bytes([255, 0, 0, 0, 0, 255])
options = WriteOptions(flip_vertically=False)

png_bytes = encode_png(2, 1, 3, pixels, 0, options)  # stride 0 means width * comp
bmp_bytes = encode_bmp(2, 1, 3, pixels, options)
```

Notes on the formats:

- PNG keeps the input's channel count and supports a row stride, so a
  sub-rectangle of a larger buffer can be written directly.
  `pixelkit.png.paeth(a, b, c)` is the Paeth predictor used by filter 4.
- BMP expands grey to RGB and drops alpha for one to three channels; RGBA
  input is written as a 32-bit bitmap with an alpha mask.
- TGA keeps grey as grey and keeps alpha.
- HDR takes linear floating-point data; alpha is dropped and grey is
  replicated across the three channels. Width and height must be positive.
  `pixelkit.hdr.linear_to_rgbe(red, green, blue)` converts a single colour
  to its four RGBE bytes.

The compressor behind PNG is available on its own as
`pixelkit.deflate.zlib_compress(data, quality)`, which produces a zlib
stream with fixed Huffman codes (or stored blocks when that would be
smaller), together with `pixelkit.deflate.crc32` and
`pixelkit.deflate.adler32`.

## Filters

The filters work on `pixelkit.image.RgbImage(width, height, data)`, an
8-bit, three-channel image stored top row first, and return a new image of
the same size:

- `pixelkit.sharpening.sharpen(image)` applies the 3x3 sharpening kernel
  with edge pixels repeated at the borders.
- `pixelkit.embossing.emboss(image)` compares each pixel with its upper-left
  neighbour and writes the strongest channel difference around mid grey;
  the first row and column are mid grey.
- `pixelkit.edges.sobel_edges(image)` computes the Sobel gradient magnitude
  per channel.
- `pixelkit.smoothing.mean_smooth(image)` averages each pixel's 3x3
  neighbourhood, using only neighbours inside the image.
- `pixelkit.smoothing.gaussian_smooth(image, sigma, edge_mode)` blurs with a
  normalised Gaussian kernel of radius `ceil(3 * sigma)` (sigma defaults to
  0.85). `edge_mode` is an `EdgeMode` member: `EdgeMode.REFLECT` (the
  default) mirrors pixels about the border, `EdgeMode.CLAMP` repeats the
  border pixel. `gaussian_kernel(sigma)` and `gaussian_weight(x, y, sigma)`
  expose the kernel itself.

```python
from pixelkit.image import RgbImage
from pixelkit.smoothing import EdgeMode, gaussian_smooth

image = RgbImage(2, 2, bytes([0, 0, 0, 255, 255, 255] * 2))
blurred = gaussian_smooth(image, 1.0, EdgeMode.CLAMP)
print(blurred.pixel(0, 0))
```

`pixelkit.image.clamp(value, low, high)` limits a value to a range (0 to
255 by default), and `RgbImage.pixel(x, y)` reads one pixel as a
`(red, green, blue)` tuple.

## Saving results

`pixelkit.output` saves an `RgbImage` as PNG:

```python
from pixelkit.output import build_paths, save_image

input_path, output_path = build_paths("photo.png", "photo-out.png")
```

`build_paths` places the input under `../inputImages/` and the output under
`../outputImages/`. `save_image(output_path, image)` writes the image and
prints where it was saved. `finalize_and_save(filter_name, output_path,
image, start)` prints the processor time spent since `start` (a value of
`time.process_time()`), saves the image, reports a failed save on standard
error, and returns the elapsed seconds.

## What pixelkit does not do

- It does not read or decode image files; pixel data must be supplied as
  bytes (or floats for HDR).
- It has no JPEG encoder.
- It installs no command-line program; the filters and encoders are used
  from Python code.
- Filters run in a single process, one pixel at a time.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.