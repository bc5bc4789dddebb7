"""Back-fill challan, PO and e-way bill references on every invoice.

Run: python -m app.migrations.update_invoice_fields
"""
import logging
from datetime import date

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import MigrationError
from app.migrations.runner import Migration, UpdateResult, main
from app.models.invoice import Invoice

logger = logging.getLogger(__name__)

NAME = "update_invoice_fields"

INVOICE_FIELD_VALUES = {
    "challan_no": "8239",
    "challan_date": date(2025, 6, 25),
    "po_no": "8932",
    "eway_no": "najsdf93289",
}


def update_invoice_fields(db: Session) -> UpdateResult:
    """Set the reference fields on all invoices to INVOICE_FIELD_VALUES."""
    logger.info("Starting migration to update invoice fields...")
    differs = or_(
        *(
            or_(getattr(Invoice, field).is_(None), getattr(Invoice, field) != value)
            for field, value in INVOICE_FIELD_VALUES.items()
        )
    )
    try:
        modified = db.execute(
            select(func.count()).select_from(Invoice).where(differs)
        ).scalar_one()
        result = db.execute(
            update(Invoice)
            .values(**INVOICE_FIELD_VALUES)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError as exc:
        logger.error("Migration failed: %s", exc)
        raise MigrationError(NAME, exc) from exc

    return UpdateResult(matched_count=result.rowcount, modified_count=modified)


MIGRATION = Migration(
    name=NAME,
    description="Back-fill challan_no, challan_date, po_no and eway_no on all invoices",
    apply=update_invoice_fields,
)


if __name__ == "__main__":
    main(MIGRATION)
