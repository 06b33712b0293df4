# qrgen

qrgen creates QR Code symbols (Model 2). It covers all versions from 1 to
40, all four error correction levels, and the numeric, alphanumeric, byte
and ECI segment modes. It needs nothing outside the standard library.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Command line

```
qrgen --text "HELLO WORLD"
```

Encodes the text and prints the symbol in the terminal, two characters
per module with a four-module light border. Text longer than 127 bytes
(UTF-8) is refused with an error and exit status 1.

```
qrgen
qrgen --folder path/to/saved
```

Starts the interactive menu:

1. **Generate**: type a line of text (at most 127 bytes) and the symbol
   is printed.
2. **Saved**: lists the `.txt` files in the folder (default `apps_data`,
   relative to the current directory), sorted by name. Choosing one
   encodes the file's *path*, not its contents.
3. **README**: prints a one-line description.

An empty line, `q`, `back` or end of input leaves the menu.

All codes made by the command use low error correction (boosted where the
chosen version allows), the smallest fitting version, and an
automatically chosen mask.

## Library use

### From text or bytes

```python
from qrgen.ecc import Ecc
from qrgen.matrix import Mask
from qrgen.qrcode import encode_text, encode_binary

qr = encode_text("HELLO WORLD", Ecc.LOW, 1, 40, Mask.AUTO, True)
for y in range(qr.size):
    print("".join("##" if qr.get_module(x, y) else "  " for x in range(qr.size)))

qr2 = encode_binary(b"\x00\x01\x02", Ecc.MEDIUM)
```

`encode_text(text, ecl, min_version, max_version, mask, boost_ecl)` picks
numeric, alphanumeric or byte (UTF-8) mode for the text; all arguments
after `text` have defaults (`Ecc.LOW`, 1, 40, `Mask.AUTO`, `True`). The
smallest version in the range that holds the data is used. With
`boost_ecl` the error correction level is raised as far as the chosen
version allows. If nothing in the range fits, `DataTooLongError` (from
`qrgen.segment`, a subclass of `ValueError`) is raised.

A `QrCode` is a frozen dataclass with `version`, `ecl`, `mask` and
`modules` (rows of booleans, `True` is dark). `size` is a property giving
the side length. `get_module(x, y)` returns the colour at `(x, y)`, with
`(0, 0)` at the top left; coordinates outside the symbol read as light.

### From segments

```python
from qrgen.ecc import Ecc
from qrgen.qrcode import encode_segments
from qrgen.segment import make_alphanumeric, make_numeric, make_bytes

segs = [
    make_alphanumeric("ORDER-"),
    make_numeric("31415926"),
    make_bytes("✓".encode("utf-8")),
]
qr = encode_segments(segs, Ecc.QUARTILE)
```

`encode_segments_advanced(segs, ecl, min_version, max_version, mask, boost_ecl)`
gives full control. `make_eci(assign_val)` builds an Extended Channel
Interpretation segment. `is_numeric` and `is_alphanumeric` tell whether
text can go into those modes; `calc_segment_bit_length` and
`get_total_bits` give the bit counts the encoder works with.

### Lower levels

`qrgen.ecc` has the `Ecc` levels, codeword capacities and the
Reed-Solomon functions (`reed_solomon_compute_divisor`,
`reed_solomon_compute_remainder`, `add_ecc_and_interleave`).
`qrgen.matrix` has the `Mask` patterns and the grid steps:
`function_module_grid`, `draw_codewords`, `apply_mask`,
`draw_format_bits` and `penalty_score`.

### Rendering and files

In `qrgen.app`:

- `render_text(qrcode)` gives the symbol as terminal text.
- `draw_qrcode(qrcode)` gives the dark squares as `(x, y, width, height)`
  boxes for a 128 × 64 screen, each module 2 pixels wide, centred.
- `write_text_to_file(path, text)` and `read_text_from_file(path)` write
  and read UTF-8 text files.
- `App(folder)` offers `generate(text)`, `open_saved(path)`, `readme()`,
  `saved_files()` and `run()` for the interactive menu.

## What it does not do

There is no graphical display; symbols are shown only as terminal text or
returned as boxes to draw. The menu does not save generated codes or
text, and the Saved entry encodes the chosen file's path rather than
reading its contents. Kanji segments can be described with `Mode.KANJI`
but there is no function that builds one from text.

## Capacity

At version 40 with low error correction, a symbol holds at most
7089 digits, 4296 alphanumeric characters or 2953 bytes.

## Tests

```
pytest
```