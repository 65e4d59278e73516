from __future__ import annotations

import os

import httpx
import pytest

from busplanner.adapters.aws import s3_client

CATALOG_TEST_BUCKET = "busplanner-test-catalog"


def _localstack_healthy(endpoint_url: str) -> bool:
    try:
        resp = httpx.get(endpoint_url.rstrip("/") + "/_localstack/health", timeout=1.5)
    except httpx.HTTPError:
        return False
    return resp.is_success


@pytest.fixture(scope="session", autouse=True)
def localstack_env() -> None:
    """Point boto3 at LocalStack unless the environment already says otherwise."""

    os.environ.setdefault("USE_LOCALSTACK", "true")
    os.environ.setdefault("ENDPOINT_URL", "http://localhost:4566")
    os.environ.setdefault("AWS_REGION", "eu-west-1")

    # boto3 refuses to sign requests without credentials, even fake ones.
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")


@pytest.fixture(scope="session")
def require_localstack(localstack_env: None) -> str:
    endpoint_url = os.environ["ENDPOINT_URL"]
    if _localstack_healthy(endpoint_url):
        return endpoint_url

    msg = f"LocalStack not reachable at {endpoint_url}"
    # CI starts LocalStack, so a missing instance there is a real failure.
    if os.getenv("CI") or os.getenv("REQUIRE_LOCALSTACK"):
        pytest.fail(msg, pytrace=False)
    pytest.skip(f"{msg}; skipping integration tests")


@pytest.fixture(scope="session")
def catalog_bucket(require_localstack: str) -> str:
    s3 = s3_client()
    try:
        s3.create_bucket(
            Bucket=CATALOG_TEST_BUCKET,
            CreateBucketConfiguration={
                "LocationConstraint": os.environ["AWS_REGION"]
            },
        )
    except (
        s3.exceptions.BucketAlreadyOwnedByYou,
        s3.exceptions.BucketAlreadyExists,
    ):
        pass
    return CATALOG_TEST_BUCKET
