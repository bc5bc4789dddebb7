"""Run the update_invoice_fields data migration.

Run: python scripts/update_invoice_fields.py   (from the backend directory)
"""
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.migrations.update_invoice_fields import MIGRATION  # noqa: E402
from app.migrations.runner import main  # noqa: E402

if __name__ == "__main__":
    main(MIGRATION)
