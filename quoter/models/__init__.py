"""Data models for the swap quoter.

The Currency model lives in quoter.models.currency; it is not re-exported
here because quoter.constants depends on this package's address helpers.
"""

from quoter.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
