#!/usr/bin/env python3
"""
Remove images left in the bucket without a section reference.

Talks to DynamoDB and S3 directly, so the usual environment applies:
GALLERY_TABLE_NAME, GALLERY_S3_BUCKET_NAME, AWS_REGION and optionally
AWS_ENDPOINT_URL / GALLERY_PUBLIC_URL_BASE. Run it while no uploads are in
flight.

Run:
    PYTHONPATH=src python seed/reconcile_blobs.py [--section-id <ID> ...] [--dry-run]
"""

import argparse
import sys

from aws_lambda_powertools import Logger

from core.models.errors import GalleryServiceError
from core.services.gallery_service import get_gallery_service

logger = Logger(service="reconcile")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile section records with stored images")

    parser.add_argument(
        "--section-id",
        action="append",
        default=None,
        help="Section to reconcile (repeatable); every section when omitted",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report orphaned images without deleting them",
    )

    return parser.parse_args()


def reconcile() -> None:
    args = parse_args()
    service = get_gallery_service()

    try:
        section_ids: list[str] = args.section_id or [
            section.section_id for section in service.list_sections()
        ]

        orphaned = 0
        for section_id in section_ids:
            report = service.reconcile_section(section_id, dry_run=args.dry_run)
            orphaned += len(report.orphaned_keys)
            logger.info("Reconciled section", extra=report.model_dump())

        logger.info(
            "Reconciliation completed",
            extra={"sections": len(section_ids), "orphaned": orphaned, "dry_run": args.dry_run},
        )

    except GalleryServiceError as exc:
        logger.exception("Reconciliation failed", extra={"error_code": exc.error_code})
        sys.exit(1)


if __name__ == "__main__":
    reconcile()
