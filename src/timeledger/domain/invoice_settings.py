"""Invoice settings domain service."""

from timeledger.database.base import Database
from timeledger.domain.entities import InvoiceSettings
from timeledger.domain.errors import ValidationError


class InvoiceSettingsService:
    """Service for the single invoice settings record."""

    def __init__(self, db: Database):
        """Initialize invoice settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_settings(self) -> InvoiceSettings:
        """Get the invoice settings.

        Returns:
            Stored settings, or unsaved defaults (id None) if never set
        """
        settings = self.db.get_invoice_settings()
        if settings is None:
            return InvoiceSettings()
        return settings

    def set_settings(self, hourly_rate: float, recipient: str, sender: str) -> InvoiceSettings:
        """Replace the invoice settings.

        Args:
            hourly_rate: Currency earned per hour, must be positive
            recipient: Who the invoices are addressed to
            sender: Who sends the invoices

        Returns:
            The stored settings

        Raises:
            ValidationError: If hourly_rate is not positive
        """
        if hourly_rate <= 0:
            raise ValidationError(f"Hourly rate must be positive, got {hourly_rate}")

        return self.db.set_invoice_settings(
            hourly_rate=float(hourly_rate),
            recipient=recipient.strip(),
            sender=sender.strip(),
        )
