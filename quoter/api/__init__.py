"""HTTP API for the swap quoter."""
