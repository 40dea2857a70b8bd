#!/usr/bin/env python3
"""
Seed script to populate the gallery via API endpoints.

Every sub-directory of ``--images-dir`` becomes a section named after the
directory; the image files inside it are uploaded to that section.

Run:
    python seed/seed_gallery.py \
      --api-url <STAGE-URL> \
      --username <ADMIN-USERNAME> \
      --password <ADMIN-PASSWORD> \
      --images-dir seed/images
"""

import argparse
import mimetypes
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed sections and images via the Gallery API")

    parser.add_argument(
        "--api-url",
        required=True,
        help="Base URL of the deployed stage (e.g. LocalStack _user_request_ URL)",
    )
    parser.add_argument("--username", required=True, help="Operator username")
    parser.add_argument("--password", required=True, help="Operator password")
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path(__file__).parent / "images",
        help="Directory holding one sub-directory per section",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Maximum number of images to upload per section",
    )

    return parser.parse_args()


def create_section(session: requests.Session, api_url: str, name: str) -> str | None:
    response = session.post(f"{api_url}/gallery/section", json={"name": name}, timeout=30)
    body = cast(dict[str, Any], response.json())

    if response.status_code == 201:
        logger.info("Created section", extra={"section_id": body["sectionId"], "section_name": name})
        return cast(str, body["sectionId"])

    logger.error(
        "Failed to create section",
        extra={"section_name": name, "status": response.status_code, "response": body},
    )
    return None


def upload_image(session: requests.Session, api_url: str, section_id: str, image_path: Path) -> None:
    content_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"

    with open(image_path, "rb") as f:
        response = session.post(
            f"{api_url}/gallery/image",
            data={"sectionId": section_id},
            files={"image": (image_path.name, f, content_type)},
            timeout=60,
        )

    body = cast(dict[str, Any], response.json())

    if response.status_code == 201:
        logger.info(
            "Seeded image",
            extra={"section_id": section_id, "image": image_path.name, "image_id": body["image"]["id"]},
        )
    else:
        logger.error(
            "Failed to seed image",
            extra={
                "section_id": section_id,
                "image": image_path.name,
                "status": response.status_code,
                "response": body,
            },
        )


def seed_gallery() -> None:
    try:
        args = parse_args()
        api_url = args.api_url.rstrip("/")

        if not args.images_dir.is_dir():
            logger.error("Images directory not found", extra={"path": str(args.images_dir)})
            sys.exit(1)

        session = requests.Session()
        session.auth = (args.username, args.password)

        logger.info("Starting seeding process", extra={"api_base_url": api_url})

        for section_dir in sorted(path for path in args.images_dir.iterdir() if path.is_dir()):
            section_id = create_section(session, api_url, section_dir.name.replace("_", " "))
            if section_id is None:
                continue

            images = sorted(
                path for path in section_dir.iterdir() if path.suffix.lower() in IMAGE_SUFFIXES
            )
            for image_path in images[: args.limit]:
                upload_image(session, api_url, section_id, image_path)

        list_response = session.get(f"{api_url}/gallery", timeout=30)
        logger.info(
            "Seeding completed",
            extra={
                "status": list_response.status_code,
                "sections": len(list_response.json()) if list_response.ok else None,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_gallery()
