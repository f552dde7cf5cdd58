"""Delta encoding followed by bit packing, in tiles of 512 values."""

from __future__ import annotations

import sys
from itertools import pairwise

from .binpack import MINIBLOCK_COUNT, WORD_MASK, _pack_frame, _pad_to_tiles, _parser
from .columns import BLOCK_SIZE, TILE_SIZE, _to_int32, load_column, store_encoded_column


def delta(values):
    """Return differences of consecutive values; the first one is 0."""
    values = list(values)
    return [0, *(_to_int32(b - a) for a, b in pairwise(values))][: len(values)]


def delta_bin_pack(values):
    """Encode signed 32-bit values; return encoded words and block offsets.

    Each tile of 512 values stores its first value, then four blocks of
    deltas packed relative to their minimum. The length must be a positive
    multiple of 512.
    """
    values = [_to_int32(value) for value in values]
    if not values or len(values) % TILE_SIZE:
        raise ValueError(f"length must be a positive multiple of {TILE_SIZE}")
    words = [BLOCK_SIZE, MINIBLOCK_COUNT, len(values), values[0] & WORD_MASK]
    offsets = []
    for tile_start in range(0, len(values), TILE_SIZE):
        tile = values[tile_start:tile_start + TILE_SIZE]
        words.append(tile[0] & WORD_MASK)
        deltas = delta(tile)
        for block_start in range(0, TILE_SIZE, BLOCK_SIZE):
            block = deltas[block_start:block_start + BLOCK_SIZE]
            offsets.append(len(words))
            low = min(block)
            words.append(low & WORD_MASK)
            words.extend(_pack_frame([(d - low) & WORD_MASK for d in block]))
    offsets.append(len(words))
    return words, offsets


def main(argv=None):
    """Delta-encode and bit-pack a column file and store the result."""
    args = _parser("deltabinpack").parse_args(argv)
    try:
        raw = load_column(args.col_name, args.length, args.data_dir, signed=True)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    print("Loaded Column")
    try:
        column = _pad_to_tiles(raw)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    words, offsets = delta_bin_pack(column)
    for start in offsets[:MINIBLOCK_COUNT]:
        print(f"max_bitwidth {words[start + 1] & 0xFF}")
    print(f"Num Elements {len(raw)}")
    print(f"Input: ArrSize {len(raw) * 4}")
    print(f"Output: ArrSize {len(words)} Offsets {len(offsets)}")
    try:
        store_encoded_column(args.col_name, words, offsets, "dbin", args.data_dir)
    except OSError as exc:
        print(f"Unable to write column: {exc}", file=sys.stderr)
        return 1
    for start in offsets[:4]:
        print(start)
    return 0


if __name__ == "__main__":
    sys.exit(main())