"""Domain layer for timeledger application."""

# Services are imported lazily: the database layer imports domain entities,
# and the services import the database layer.
_SERVICES = {
    "TimeEntryService": "timeledger.domain.time_entry",
    "CSVImportService": "timeledger.domain.csv_import",
    "InvoiceService": "timeledger.domain.invoice",
    "InvoiceSettingsService": "timeledger.domain.invoice_settings",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
