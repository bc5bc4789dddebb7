"""Run the remove_login_attempts data migration.

Run: python scripts/remove_login_attempts.py   (from the backend directory)
"""
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.migrations.remove_login_attempts import MIGRATION  # noqa: E402
from app.migrations.runner import main  # noqa: E402

if __name__ == "__main__":
    main(MIGRATION)
