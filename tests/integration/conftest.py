"""Integration test fixtures — A real OpenSearch cluster.

Expects OpenSearch to be running, e.g.:
    docker run -d -p 9201:9200 -e discovery.type=single-node \
        -e DISABLE_SECURITY_PLUGIN=true opensearchproject/opensearch:2

The node URL can be overridden with ``DOCSEARCH_TEST_OPENSEARCH``.
"""

from __future__ import annotations

import os
import time

import httpx
import pytest


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


@pytest.fixture(scope="session")
def opensearch_ready() -> str:
    """Ensure OpenSearch is running."""
    host = os.environ.get("DOCSEARCH_TEST_OPENSEARCH", "http://localhost:9201")
    if not _wait_for_service(host, timeout=10.0):
        pytest.skip(f"OpenSearch not available at {host}")
    return host
