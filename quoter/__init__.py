"""Split-routing swap quoter."""

from quoter.config import QuoterConfig
from quoter.models.currency import Currency
from quoter.quoter import Quoter
from quoter.routing.quote import Quote

__version__ = "0.1.0"

__all__ = ["Currency", "Quote", "Quoter", "QuoterConfig"]
