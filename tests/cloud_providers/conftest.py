# SPDX-License-Identifier: GPL-3.0-or-later
import json
from typing import Any, Dict, Optional
from unittest import mock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from pubtools._gcloud.cloud_providers import CloudProvider, GCloudCredentials, GCloudProvider


class FakeProvider(CloudProvider):
    def __init__(self, creds) -> None:
        self.creds = creds

    @classmethod
    def from_credentials(cls, fake_creds: Dict[str, Any]) -> 'FakeProvider':
        return cls(fake_creds)

    def _delete_image(self, name):
        return mock.MagicMock(name=name)


def make_http_error(status: int, message: Optional[str] = None) -> HttpError:
    """Build an HttpError the same way the Google API client does."""
    resp = httplib2.Response({"status": status})
    resp.reason = "Reason"
    content = b""
    if message:
        content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
    return HttpError(resp, content, uri="https://compute.googleapis.com/compute/v1/projects/p1")


@pytest.fixture
def fake_provider():
    yield FakeProvider.from_credentials({})


@pytest.fixture
def compute() -> mock.MagicMock:
    return mock.MagicMock(name="compute")


@pytest.fixture
def gcloud_provider(compute: mock.MagicMock) -> GCloudProvider:
    return GCloudProvider(GCloudCredentials(project="p1"), compute=compute)
