"""Core chain state types: big integers, signatures, network versions and CBOR encoding."""

__version__ = "0.1.0"