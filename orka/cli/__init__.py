"""Command-line interface for the Orka SDK."""
