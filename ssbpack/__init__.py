"""Bit-packing and delta bit-packing of SSB integer columns, with single-value decoding."""

__version__ = "0.1.0"
__all__ = ["columns", "binpack", "deltabinpack", "decode"]