"""
ICL Engine

Image Cash Letter (X9.100-187 / DSTU X9.37) codec and structural validator.
"""

from .protocols.x9 import (
    Bundle,
    CashLetter,
    ICLFile,
    ICLOptions,
    ICLReader,
    ICLWriter,
    read_file,
    write_file,
)

__version__ = "1.0.0"
__all__ = [
    "Bundle",
    "CashLetter",
    "ICLFile",
    "ICLOptions",
    "ICLReader",
    "ICLWriter",
    "read_file",
    "write_file",
]
