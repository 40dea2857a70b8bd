#!/usr/bin/env python3
"""
Cleanup script to remove sections (and their images) via API endpoints.

Run:
    python seed/cleanup_gallery.py \
      --api-url <STAGE-URL> \
      --username <ADMIN-USERNAME> \
      --password <ADMIN-PASSWORD> \
      [--section-id <SECTION-ID> ...]
"""

import argparse
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="cleanup")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete gallery sections via the Gallery API")

    parser.add_argument("--api-url", required=True, help="Base URL of the deployed stage")
    parser.add_argument("--username", required=True, help="Operator username")
    parser.add_argument("--password", required=True, help="Operator password")
    parser.add_argument(
        "--section-id",
        action="append",
        default=None,
        help="Section to delete (repeatable); every section when omitted",
    )

    return parser.parse_args()


def cleanup_gallery() -> None:
    try:
        args = parse_args()
        api_url = args.api_url.rstrip("/")

        session = requests.Session()
        session.auth = (args.username, args.password)

        section_ids: list[str] = args.section_id or []
        if not section_ids:
            list_response = session.get(f"{api_url}/gallery", timeout=30)
            list_response.raise_for_status()
            sections = cast(list[dict[str, Any]], list_response.json())
            section_ids = [section["sectionId"] for section in sections]

        logger.info(
            "Starting cleanup process",
            extra={"api_base_url": api_url, "sections": len(section_ids)},
        )

        deleted = 0
        for section_id in section_ids:
            response = session.delete(f"{api_url}/gallery/section/{section_id}", timeout=60)

            if response.status_code == 200:
                deleted += 1
                logger.info("Deleted section", extra={"section_id": section_id})
            else:
                logger.error(
                    "Failed to delete section",
                    extra={
                        "section_id": section_id,
                        "status": response.status_code,
                        "response": response.text,
                    },
                )

        logger.info("Cleanup completed", extra={"deleted": deleted})

    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    cleanup_gallery()
