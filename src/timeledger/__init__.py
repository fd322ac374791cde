"""Timeledger: deduplicating time log import, billing periods and invoices."""

__version__ = "0.1.0"


# The CLI pulls in every layer, so it is only imported on first use
def __getattr__(name):
    if name == "main":
        from timeledger.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
