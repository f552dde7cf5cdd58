"""Frame-of-reference bit packing of a column in blocks of 128 values."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .columns import (
    BLOCK_SIZE,
    DEFAULT_DATA_DIR,
    LO_LEN,
    load_column,
    padded_length,
    store_encoded_column,
)

MINIBLOCK_COUNT = 4
MINIBLOCK_SIZE = BLOCK_SIZE // MINIBLOCK_COUNT
WORD_MASK = 0xFFFFFFFF


def _pack_frame(frame):
    """Pack one block of non-negative 32-bit values.

    Returns the bit-width word followed by the packed miniblocks. Every
    miniblock uses the widest width of the whole block.
    """
    width = max(value.bit_length() for value in frame)
    words = [width * 0x01010101]
    for start in range(0, BLOCK_SIZE, MINIBLOCK_SIZE):
        words.append(0)
        shift = 0
        for value in frame[start:start + MINIBLOCK_SIZE]:
            if shift + width > 32:
                if shift != 32:
                    words[-1] = (words[-1] + (value << shift)) & WORD_MASK
                shift = (shift + width) & 31
                words.append((value >> ((width - shift) & 31)) & WORD_MASK)
            else:
                words[-1] = (words[-1] + (value << shift)) & WORD_MASK
                shift += width
    return words


def _pad_to_tiles(values):
    values = list(values)
    if not values:
        raise ValueError("column is empty")
    return values + [values[-1]] * (padded_length(len(values)) - len(values))


def bin_pack(values):
    """Encode values; return the encoded words and the block offsets.

    The length must be a positive multiple of 128. The words start with a
    header of block size, miniblock count, value count and first value.
    """
    values = [value & WORD_MASK for value in values]
    if not values or len(values) % BLOCK_SIZE:
        raise ValueError(f"length must be a positive multiple of {BLOCK_SIZE}")
    words = [BLOCK_SIZE, MINIBLOCK_COUNT, len(values), values[0]]
    offsets = []
    for start in range(0, len(values), BLOCK_SIZE):
        block = values[start:start + BLOCK_SIZE]
        offsets.append(len(words))
        low = min(block)
        words.append(low)
        words.extend(_pack_frame([value - low for value in block]))
    offsets.append(len(words))
    return words, offsets


def _parser(prog):
    parser = argparse.ArgumentParser(prog=prog, usage="encode <col-name>")
    parser.add_argument("col_name")
    parser.add_argument("--data-dir", type=Path, default=DEFAULT_DATA_DIR)
    parser.add_argument("--length", type=int, default=LO_LEN)
    return parser


def main(argv=None):
    """Bit-pack a column file and store the result with its offsets."""
    args = _parser("binpack").parse_args(argv)
    try:
        raw = load_column(args.col_name, args.length, args.data_dir)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    print("Loaded Column")
    try:
        column = _pad_to_tiles(raw)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    words, offsets = bin_pack(column)
    print(f"max_bitwidth {words[offsets[0] + 1] & 0xFF}")
    print(f"Num Elements {len(raw)}")
    print(f"Input: ArrSize {len(raw) * 4}")
    print(f"Output: ArrSize {len(words)} Offsets {len(offsets)}")
    try:
        store_encoded_column(args.col_name, words, offsets, "bin", args.data_dir)
    except OSError as exc:
        print(f"Unable to write column: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())