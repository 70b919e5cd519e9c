"""Input file readers."""

from .csv_reader import InputFileError, ProductFile, is_overflow_column, overflow_column, read_product_file

__all__ = [
    "InputFileError",
    "ProductFile",
    "read_product_file",
    "overflow_column",
    "is_overflow_column",
]
