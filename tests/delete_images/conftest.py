# SPDX-License-Identifier: GPL-3.0-or-later
from typing import Dict, Generator, List, Optional, Union
from unittest import mock

import pytest

from pubtools._gcloud.cloud_providers import CloudProvider, PendingOperation


class FakePendingOperation(PendingOperation):
    """Define a fake pending operation which optionally fails on wait."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.waited = False

    def wait(self) -> None:
        self.waited = True
        if self.error:
            raise self.error


class FakeCloudProvider(CloudProvider):
    """Define a fake cloud provider for testing.

    The ``outcomes`` map an image name to either the exception raised when deleting
    it or the pending operation returned for it.
    """

    def __init__(
        self, outcomes: Optional[Dict[str, Union[Exception, PendingOperation]]] = None
    ) -> None:
        self.outcomes = outcomes or {}
        self.pendings: Dict[str, PendingOperation] = {}
        self.deleted: List[str] = []

    @classmethod
    def from_credentials(cls, _):
        return cls()

    def _delete_image(self, name: str) -> PendingOperation:
        self.deleted.append(name)
        outcome = self.outcomes.get(name) or FakePendingOperation()
        if isinstance(outcome, Exception):
            raise outcome
        self.pendings[name] = outcome
        return outcome


@pytest.fixture
def fake_provider() -> FakeCloudProvider:
    return FakeCloudProvider()


@pytest.fixture
def fake_cloud_instance(
    fake_provider: FakeCloudProvider,
) -> Generator[mock.MagicMock, None, None]:
    with mock.patch(
        "pubtools._gcloud.tasks.delete_images.GCloudDeleteImages.cloud_instance"
    ) as m:
        m.return_value = fake_provider
        yield m
