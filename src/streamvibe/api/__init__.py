"""FastAPI transport for asset resolution."""
