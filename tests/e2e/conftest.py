"""
End-to-end fixtures for a deployed gallery API.

Set GALLERY_API_URL to the stage URL (e.g. a LocalStack or AWS API Gateway
stage) and GALLERY_E2E_USERNAME / GALLERY_E2E_PASSWORD to the operator
credentials. The suite is skipped when GALLERY_API_URL is not set.
"""

import base64
import logging
import os
import uuid

import pytest
import requests

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30

SAMPLE_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


class E2EAPIClient:
    """Wrapper for making HTTP requests to the gallery API"""

    def __init__(self, endpoint: str, auth: tuple[str, str] | None = None):
        self.endpoint = endpoint.rstrip("/")
        self.auth = auth
        self.session = requests.Session()

    def _request(self, method: str, path: str, *, authenticated: bool, **kwargs) -> requests.Response:
        url = f"{self.endpoint}{path}"
        auth = self.auth if authenticated else None
        return self.session.request(method, url, auth=auth, timeout=REQUEST_TIMEOUT_SECONDS, **kwargs)

    def get(self, path: str, *, authenticated: bool = False) -> requests.Response:
        return self._request("GET", path, authenticated=authenticated)

    def post(self, path: str, data: dict, *, authenticated: bool = True) -> requests.Response:
        return self._request("POST", path, authenticated=authenticated, json=data)

    def post_multipart(
        self,
        path: str,
        fields: dict[str, str],
        files: dict[str, tuple[str, bytes, str]],
        *,
        authenticated: bool = True,
    ) -> requests.Response:
        return self._request("POST", path, authenticated=authenticated, data=fields, files=files)

    def delete(self, path: str, *, authenticated: bool = True) -> requests.Response:
        return self._request("DELETE", path, authenticated=authenticated)


@pytest.fixture(scope="session")
def api_endpoint() -> str:
    endpoint = os.getenv("GALLERY_API_URL")
    if not endpoint:
        pytest.skip("GALLERY_API_URL is not set")
    return endpoint


@pytest.fixture(scope="session")
def operator_credentials() -> tuple[str, str]:
    username = os.getenv("GALLERY_E2E_USERNAME")
    password = os.getenv("GALLERY_E2E_PASSWORD")
    if not username or not password:
        pytest.skip("GALLERY_E2E_USERNAME and GALLERY_E2E_PASSWORD are not set")
    return username, password


@pytest.fixture
def api_client(api_endpoint, operator_credentials):
    """HTTP client wrapper for E2E API testing"""
    client = E2EAPIClient(api_endpoint, operator_credentials)
    yield client
    client.session.close()


@pytest.fixture
def section_factory(api_client):
    """Create uniquely named sections and delete them after the test."""
    created: list[str] = []

    def _create(prefix: str = "e2e") -> dict:
        name = f"{prefix} {uuid.uuid4().hex[:8]}"
        response = api_client.post("/gallery/section", {"name": name})
        assert response.status_code == 201, f"Section create failed: {response.text}"
        section = response.json()
        created.append(section["sectionId"])
        return section

    yield _create

    for section_id in created:
        response = api_client.delete(f"/gallery/section/{section_id}")
        if response.status_code not in (200, 404):
            logger.warning("Failed to clean up section %s: %s", section_id, response.text)


@pytest.fixture
def sample_png_base64() -> str:
    return SAMPLE_PNG_BASE64


@pytest.fixture
def sample_png_bytes() -> bytes:
    return base64.b64decode(SAMPLE_PNG_BASE64)
