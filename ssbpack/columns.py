"""Column files of the star schema benchmark data set and their encoded forms."""

from __future__ import annotations

import struct
import sys
from array import array
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

BLOCK_SIZE = 128
ELEMENTS_PER_THREAD = 4
TILE_SIZE = BLOCK_SIZE * ELEMENTS_PER_THREAD

# Row counts of the scale-factor-1 data set.
LO_LEN = 6001171
P_LEN = 200000
S_LEN = 2000
C_LEN = 30000
D_LEN = 2556

DEFAULT_DATA_DIR = Path("test/ssb/data/s1_columnar")
TEST_COLUMN_DIR = "../../../bench/data/"
ENCODINGS = frozenset({"bin", "dbin", "pbin"})

_WORD_MASK = 0xFFFFFFFF
_WORD_CODE = "I" if array("I").itemsize == 4 else "L"

_TABLES = {
    "l": (
        "LINEORDER",
        (
            "lo_orderkey", "lo_linenumber", "lo_custkey", "lo_partkey",
            "lo_suppkey", "lo_orderdate", "lo_orderpriority", "lo_shippriority",
            "lo_quantity", "lo_extendedprice", "lo_ordtotalprice", "lo_discount",
            "lo_revenue", "lo_supplycost", "lo_tax", "lo_commitdate", "lo_shipmode",
        ),
    ),
    "s": (
        "SUPPLIER",
        ("s_suppkey", "s_name", "s_address", "s_city", "s_nation", "s_region", "s_phone"),
    ),
    "c": (
        "CUSTOMER",
        (
            "c_custkey", "c_name", "c_address", "c_city", "c_nation",
            "c_region", "c_phone", "c_mktsegment",
        ),
    ),
    "p": (
        "PART",
        (
            "p_partkey", "p_name", "p_mfgr", "p_category", "p_brand1",
            "p_color", "p_type", "p_size", "p_container",
        ),
    ),
    "d": (
        "DDATE",
        (
            "d_datekey", "d_date", "d_dayofweek", "d_month", "d_year",
            "d_yearmonthnum", "d_yearmonth", "d_daynuminweek", "d_daynuminmonth",
            "d_daynuminyear", "d_sellingseason", "d_lastdayinweekfl",
            "d_lastdayinmonthfl", "d_holidayfl", "d_weekdayfl",
        ),
    ),
}


class UnknownColumnError(ValueError):
    """Raised for a column name that belongs to no known table."""


def _to_int32(value: int) -> int:
    return ((value + 0x80000000) & _WORD_MASK) - 0x80000000


def _words_from_bytes(raw: bytes) -> array:
    words = array(_WORD_CODE)
    words.frombytes(raw[: len(raw) // 4 * 4])
    if sys.byteorder == "big":
        words.byteswap()
    return words


def _words_to_bytes(words: Iterable[int]) -> bytes:
    packed = array(_WORD_CODE, words)
    if sys.byteorder == "big":
        packed.byteswap()
    return packed.tobytes()


def lookup(col_name: str) -> str:
    """Return the file name that holds the named column.

    A name missing from its table maps to index -1; names starting with
    "t" are test columns kept outside the data directory.
    """
    prefix = col_name[:1]
    if prefix == "t":
        return TEST_COLUMN_DIR + col_name
    if prefix not in _TABLES:
        raise UnknownColumnError(f"Unknown column {col_name}")
    table, names = _TABLES[prefix]
    index = names.index(col_name) if col_name in names else -1
    return f"{table}{index}"


def padded_length(num_entries: int) -> int:
    """Round a row count up to a whole number of tiles."""
    return (num_entries + TILE_SIZE - 1) // TILE_SIZE * TILE_SIZE


def _format(count: int, signed: bool) -> str:
    return f"<{count}{'i' if signed else 'I'}"


def load_column(col_name, num_entries, data_dir=DEFAULT_DATA_DIR, signed=False):
    """Read the first ``num_entries`` 32-bit values of a column file."""
    path = Path(data_dir) / lookup(col_name)
    raw = path.read_bytes()
    if len(raw) < num_entries * 4:
        raise ValueError(
            f"{path} holds {len(raw) // 4} values, {num_entries} requested"
        )
    return list(struct.unpack_from(_format(num_entries, signed), raw))


def store_column(col_name, values, data_dir=DEFAULT_DATA_DIR, signed=False):
    """Write values as a column file of 32-bit little-endian integers."""
    values = list(values)
    path = Path(data_dir) / lookup(col_name)
    path.write_bytes(struct.pack(_format(len(values), signed), *values))
    return path


def _check_encoding(encoding: str) -> None:
    if encoding not in ENCODINGS:
        raise ValueError("Encoding has to be bin or dbin")


def store_encoded_column(col_name, words, offsets, encoding="bin", data_dir=DEFAULT_DATA_DIR):
    """Write an encoded column and its block offsets next to each other."""
    _check_encoding(encoding)
    base = Path(data_dir) / f"{lookup(col_name)}.{encoding}"
    offsets_path = base.with_name(base.name + "off")
    base.write_bytes(_words_to_bytes(words))
    offsets_path.write_bytes(_words_to_bytes(offsets))
    return base, offsets_path


@dataclass
class EncodedColumn:
    """An encoded column: block start offsets (in words) and raw data words."""

    block_start: list
    data: array
    data_size: int

    def __post_init__(self) -> None:
        self.block_start = list(self.block_start)
        if not isinstance(self.data, array):
            self.data = array(_WORD_CODE, self.data)


def load_encoded_column(col_name, encoding, num_entries, data_dir=DEFAULT_DATA_DIR):
    """Load an encoded column and the offsets of its blocks."""
    _check_encoding(encoding)
    base = Path(data_dir) / f"{lookup(col_name)}.{encoding}"
    offsets_path = base.with_name(base.name + "off")
    raw = base.read_bytes()
    num_blocks = padded_length(num_entries) // BLOCK_SIZE
    offsets = _words_from_bytes(offsets_path.read_bytes())
    if len(offsets) < num_blocks + 1:
        raise ValueError(
            f"{offsets_path} holds {len(offsets)} offsets, {num_blocks + 1} needed"
        )
    return EncodedColumn(
        block_start=offsets[: num_blocks + 1].tolist(),
        data=_words_from_bytes(raw),
        data_size=len(raw),
    )