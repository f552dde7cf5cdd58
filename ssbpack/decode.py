"""Random access decoding of single values from encoded columns."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .binpack import MINIBLOCK_SIZE
from .columns import (
    BLOCK_SIZE,
    DEFAULT_DATA_DIR,
    LO_LEN,
    TILE_SIZE,
    _to_int32,
    load_column,
    load_encoded_column,
)


def decode_element(i, data_block):
    """Decode entry ``i`` (0..127) of a block starting at ``data_block[0]``.

    The result is the block reference plus the packed value, as a signed
    32-bit integer.
    """
    if not 0 <= i < BLOCK_SIZE:
        raise IndexError(f"entry {i} outside a block of {BLOCK_SIZE}")
    reference = _to_int32(data_block[0])
    widths = data_block[1]
    miniblock, position = divmod(i, MINIBLOCK_SIZE)
    miniblock_offset = 0
    for _ in range(miniblock):
        miniblock_offset += widths & 0xFF
        widths >>= 8
    width = widths & 0xFF
    start_bit = width * position
    base = miniblock_offset + 2 + start_bit // 32
    low = data_block[base]
    high = data_block[base + 1] if base + 1 < len(data_block) else 0
    pair = (high << 32) | low
    element = (pair >> (start_bit & 31)) & ((1 << width) - 1)
    return _to_int32(reference + element)


def _decode_at(column, i):
    block_index, entry = divmod(i, BLOCK_SIZE)
    if block_index >= len(column.block_start) - 1:
        raise IndexError(f"value {i} lies past the last block")
    start = column.block_start[block_index]
    return decode_element(entry, memoryview(column.data)[start:])


def decode_value(column, i, encoding="bin"):
    """Decode value ``i`` of a "bin" or "dbin" encoded column."""
    if encoding not in ("bin", "dbin"):
        raise ValueError("Encoding has to be bin or dbin")
    if i < 0:
        raise IndexError(f"negative index {i}")
    if encoding == "bin":
        return _decode_at(column, i)
    tile_start = i - i % TILE_SIZE
    first_block = tile_start // BLOCK_SIZE
    if first_block >= len(column.block_start) - 1:
        raise IndexError(f"value {i} lies past the last block")
    value = _to_int32(column.data[column.block_start[first_block] - 1])
    for j in range(tile_start + 1, i + 1):
        value += _decode_at(column, j)
    return _to_int32(value)


def _inspect(column_name, index, encoding, data_dir, length):
    if not 0 <= index < length:
        raise IndexError(f"index {index} outside a column of {length}")
    original = load_column(column_name, length, data_dir, signed=True)
    column = load_encoded_column(column_name, encoding, length, data_dir)
    block_index, entry = divmod(index, BLOCK_SIZE)
    print(f"ThreadIdx {entry} block_index {block_index}")
    print("Block starts:")
    for start in column.block_start[block_index:block_index + 5]:
        print(start)
    print("Col values:")
    first = block_index * BLOCK_SIZE
    print(",".join(str(value) for value in original[first:first + BLOCK_SIZE]))
    print("Binary:")
    begin = column.block_start[block_index] - (1 if encoding == "dbin" else 0)
    end = column.block_start[block_index + 1]
    for word in column.data[begin:end]:
        print(f"{word:032b}")
    print(f"Item Decoded: {decode_value(column, index, encoding)}")
    print(f"Item Original: {original[index]}")


def _parser(prog):
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("--column", default="lo_quantity")
    parser.add_argument("--data-dir", type=Path, default=DEFAULT_DATA_DIR)
    parser.add_argument("--length", type=int, default=LO_LEN)
    return parser


def _run(args, index, encoding):
    try:
        _inspect(args.column, index, encoding, args.data_dir, args.length)
    except (OSError, ValueError, IndexError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def main_bin(argv=None):
    """Decode one value of a "bin" column and show it beside the original."""
    parser = _parser("testelem_bin")
    parser.add_argument("--index", type=int, default=17475213)
    args = parser.parse_args(argv)
    return _run(args, args.index, "bin")


def main_dbin(argv=None):
    """Decode one value of a "dbin" column and show it beside the original."""
    parser = _parser("testelem_dbin")
    parser.add_argument("index", type=int, nargs="?")
    args = parser.parse_args(argv)
    if args.index is None:
        print("Need i")
        return 1
    return _run(args, args.index, "dbin")


if __name__ == "__main__":
    sys.exit(main_dbin())