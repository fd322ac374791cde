"""SQLAlchemy models for timeledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Interval,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

INVOICE_SETTINGS_SLOT = "primary"


class UTCDateTime(TypeDecorator):
    """Stores aware datetimes as naive UTC and returns them as aware UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Refusing to store naive datetime {value.isoformat()}")
        return value.astimezone(UTC).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class CSVImport(Base):
    """Uploaded CSV file model."""

    __tablename__ = "csv_imports"

    id = Column(Integer, primary_key=True)
    file_name = Column(String, nullable=False)
    file_contents = Column(Text, nullable=False)
    duplicate_time_entry_ids = Column(JSON, default=list, nullable=False)
    created_at = Column(UTCDateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    time_entries = relationship("TimeEntry", back_populates="csv_import")


class TimeEntry(Base):
    """Time entry model."""

    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True)
    start_time = Column(UTCDateTime, nullable=False, index=True)
    end_time = Column(UTCDateTime, nullable=False)
    duration = Column(Interval, nullable=False)
    comment = Column(String, nullable=False, default="")
    identity_hash = Column(String(64), nullable=False)
    csv_import_id = Column(Integer, ForeignKey("csv_imports.id"), nullable=False)

    # The identity hash is the natural key; inserts rely on this constraint
    __table_args__ = (UniqueConstraint("identity_hash", name="uq_time_entry_identity_hash"),)

    # Relationships
    csv_import = relationship("CSVImport", back_populates="time_entries")


class InvoiceSettings(Base):
    """Invoice settings model, holds at most one row."""

    __tablename__ = "invoice_settings"

    id = Column(Integer, primary_key=True)
    slot = Column(String, unique=True, nullable=False, default=INVOICE_SETTINGS_SLOT)
    hourly_rate = Column(Float, nullable=False)
    recipient = Column(String, nullable=False)
    sender = Column(String, nullable=False)


class Invoice(Base):
    """Invoice model."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_settings_id = Column(Integer, ForeignKey("invoice_settings.id"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    duration = Column(Interval, nullable=False)
    amount_due = Column(Float, nullable=False)
    sent_to_client = Column(UTCDateTime, nullable=True)
    paid_by_client = Column(UTCDateTime, nullable=True)
    archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(UTCDateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    invoice_settings = relationship("InvoiceSettings")
    invoice_time_entries = relationship(
        "InvoiceTimeEntry",
        back_populates="invoice",
        order_by="InvoiceTimeEntry.position",
        cascade="all, delete-orphan",
    )


class InvoiceTimeEntry(Base):
    """Association between an invoice and one of its time entries."""

    __tablename__ = "invoice_time_entries"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    time_entry_id = Column(Integer, ForeignKey("time_entries.id"), nullable=False)
    position = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("invoice_id", "time_entry_id", name="uq_invoice_time_entry"),
    )

    # Relationships
    invoice = relationship("Invoice", back_populates="invoice_time_entries")
    time_entry = relationship("TimeEntry")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
