"""
Expiry Scan: run from cron.

Collapses documents whose expiry date has passed to `expired`, then
marks verified documents inside the warning window as notified.

Usage:
    python -m scripts.scan_expiry [--database-url URL] [--threshold-days 30] [--json]
"""
import argparse
import json
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env"))

from hirewise.config.logging_config import configure_logging
from hirewise.config.settings import get_settings
from hirewise.core.use_cases.scan_expiring_documents import ScanExpiringDocumentsUseCase
from hirewise.infrastructure.db.database import create_db_engine, get_session_factory, init_db
from hirewise.infrastructure.db.repository import SqlAlchemyUnitOfWork
from hirewise.infrastructure.rules.expiry_evaluator import CalendarExpiryEvaluator

logger = logging.getLogger("scan_expiry")


def log_notice(document, classification):
    """Stand-in notifier: delivery is handled by the messaging service."""
    logger.info(
        f"Expiry notice: document {document.id} ({document.type.value}) of {document.owner} "
        f"expires in {classification.days_remaining} day(s) [{classification.bucket.value}]"
    )


def main():
    parser = argparse.ArgumentParser(description="Scan documents for expiry")
    parser.add_argument("--database-url", default=None, help="Override HIREWISE_DATABASE_URL")
    parser.add_argument("--threshold-days", type=int, default=None, help="Warning window in days")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    configure_logging(args.log_level)
    settings = get_settings()

    engine = create_db_engine(args.database_url or settings.database_url)
    init_db(engine)
    factory = get_session_factory(engine)

    scan = ScanExpiringDocumentsUseCase(
        uow_factory=lambda: SqlAlchemyUnitOfWork(factory),
        expiry_evaluator=CalendarExpiryEvaluator(settings.expiry_thresholds()),
        notifier=log_notice,
        threshold_days=args.threshold_days if args.threshold_days is not None else settings.expiring_soon_days,
    )
    report = scan.execute()

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(f"\n{'='*50}")
        print("  EXPIRY SCAN")
        print(f"{'='*50}")
        print(f"  Expired:   {len(report.expired)}")
        print(f"  Notified:  {len(report.notified)}")
        print(f"  Conflicts: {len(report.conflicts)} (retried next run)")
        print(f"{'='*50}")


if __name__ == "__main__":
    main()
