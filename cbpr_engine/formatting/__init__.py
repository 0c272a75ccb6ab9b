"""
CBPR+ Value Formatting

Wire-format rendering of amounts, dates and IBANs, consumed by the
validation engine through the ValueFormatter protocol.
"""

from cbpr_engine.formatting.formatter import CbprFormatter, ValueFormatter, generate_uetr

__all__ = ["CbprFormatter", "ValueFormatter", "generate_uetr"]
