# ssbpack

Encoders for integer columns of the Star Schema Benchmark (SSB) stored as raw
little-endian 32-bit binary files, and tools that decode a single value back
out of the encoded form without unpacking the rest of the column.

## Encodings

- **bin** – frame-of-reference bit-packing. Values are split into blocks of
  128. Each block is stored as its minimum, then a word holding the bit width
  (the same width in each of its four bytes), then the values minus the
  minimum, packed at that width in four miniblocks of 32 values.
- **dbin** – delta bit-packing. Values are split into tiles of 512. Each tile
  stores its first value, is turned into differences of consecutive values
  (the first difference being 0), and each of its four 128-value blocks is
  then packed as above.

Both encodings start with a four-word header: block size (128), miniblock
count (4), number of values and the first value.

An encoded column is written as `<file>.bin` or `<file>.dbin`, next to a
block-offset file `<file>.binoff` or `<file>.dbinoff` that gives the word at
which every 128-value block starts, plus a final offset one past the end. All
words are unsigned 32-bit little-endian.

## Installation

```
pip install .
```

There are no runtime dependencies. To run the tests:

```
pip install .[test]
pytest
```

## Column names

`ssbpack.columns.lookup` maps a column name to its file name: `lo_quantity`
becomes `LINEORDER8`, `p_size` becomes `PART7`, `d_year` becomes `DDATE4`.
Tables are chosen by the first letter (`l`, `s`, `c`, `p`, `d`); a name that is
not in its table gets index `-1` (for example `LINEORDER-1`). Names starting
with `t` are test columns and map to `../../../bench/data/<name>`. Any other
name raises `ssbpack.columns.UnknownColumnError`, a `ValueError`.

Files are read from and written to a data directory, by default
`test/ssb/data/s1_columnar` relative to the working directory.

## Command line

Every command takes `--data-dir DIR` and `--length N` (the number of values to
read from the column; by default 6001171, the LINEORDER row count at scale
factor 1).

Encode a column. The column is padded with its last value to a multiple of
512 before encoding:

```
ssb-binpack lo_quantity
ssb-deltabinpack lo_orderdate --data-dir data
```

Both print the bit width of the first blocks, the input and output sizes, and
store the encoded file and its offsets beside the raw column.

Decode one value and show it beside the original, with the block offsets, the
block's original values and the encoded words in binary. `ssb-testelem-bin`
takes the position with `--index` and `ssb-testelem-dbin` as a positional
argument; both read `lo_quantity` unless `--column` names another column:

```
ssb-testelem-bin --index 1000
ssb-testelem-dbin 1000 --column lo_orderdate
```

Commands return 0 on success and 1 on a missing file, a too-short column or an
index out of range, with the reason on standard error.

## Library use

```python
from ssbpack.binpack import bin_pack
from ssbpack.deltabinpack import delta, delta_bin_pack
from ssbpack.decode import decode_element, decode_value
from ssbpack.columns import (
    EncodedColumn,
    load_column,
    load_encoded_column,
    lookup,
    padded_length,
    store_column,
    store_encoded_column,
)

words, offsets = bin_pack(range(128 * 4))          # length: multiple of 128
dwords, doffsets = delta_bin_pack(range(512))      # length: multiple of 512

column = EncodedColumn(block_start=offsets, data=words, data_size=len(words) * 4)
assert decode_value(column, 300, "bin") == 300
```

- `bin_pack(values)` and `delta_bin_pack(values)` return the encoded words and
  the block offsets; they raise `ValueError` for an empty input or a length
  that is not a whole number of blocks (128) or tiles (512).
- `delta(values)` returns the differences of consecutive values, wrapped to
  signed 32 bits, with 0 first.
- `padded_length(n)` rounds `n` up to a multiple of 512.
- `load_column` / `store_column` read and write raw columns of 32-bit values
  (`signed=True` for signed values).
- `store_encoded_column` writes the encoded words and offsets;
  `load_encoded_column` reads them back into an `EncodedColumn` with
  `block_start` (offsets in words), `data` (the words) and `data_size` (bytes).
  Accepted encodings are `bin`, `dbin` and `pbin`; anything else raises
  `ValueError`.
- `decode_element(i, data_block)` decodes entry `i` (0–127) of a block given
  as the words starting at the block's offset.
- `decode_value(column, i, encoding)` decodes value `i` of a `bin` or `dbin`
  column; for `dbin` it adds up the deltas from the start of the value's tile.

## What it does not do

The package only encodes and decodes integer columns that already exist as
raw binary files. It does not generate benchmark data, convert text tables
into column files, encode string columns, or run benchmark queries over the
encoded data.