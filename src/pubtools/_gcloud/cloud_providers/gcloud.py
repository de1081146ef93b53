# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import os
import time
from typing import Any, Dict, List, Optional

import google.auth
from attrs import field, frozen
from attrs.validators import instance_of, optional
from google.auth.credentials import Credentials
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .base import CloudAPIError, CloudCredentials, CloudProvider, PendingOperation

LOG = logging.getLogger("pubtools.gcloud")

SCOPES = ["https://www.googleapis.com/auth/compute"]


def _seconds_from_environ(key: str, default: str) -> float:
    value = os.environ.get(key) or default
    try:
        seconds = float(value)
    except ValueError:
        seconds = -1.0
    if seconds < 0:
        CloudProvider.raise_error(
            ValueError, f"Invalid value for {key}: expected a number of seconds, got \"{value}\""
        )
    return seconds


class GCloudAPIError(CloudAPIError):
    """An error returned by the Google Compute Engine API."""

    @classmethod
    def from_http_error(cls, error: HttpError) -> 'GCloudAPIError':
        """
        Convert an ``HttpError`` from the Google API client.

        Args:
            error (HttpError)
                The error raised by the client library.
        Returns:
            The equivalent GCloudAPIError.
        """
        status = int(error.resp.status)
        reason = error.reason or error.resp.reason
        return cls(status, f"googleapi: Error {status}: {reason}")


class OperationFailedError(Exception):
    """A GCE operation finished with errors."""


class OperationTimeoutError(Exception):
    """A GCE operation did not finish in time."""


@frozen
class GCloudCredentials(CloudCredentials):
    """Represent the credentials for GCloudProvider."""

    service_account_info: Optional[Dict[str, Any]] = field(
        validator=optional(instance_of(dict)), default=None
    )
    """The service account key. When not set the application default credentials are used."""

    @property
    def credentials(self) -> Credentials:
        """Return the google-auth credentials."""
        if self.service_account_info:
            return service_account.Credentials.from_service_account_info(
                self.service_account_info, scopes=SCOPES
            )
        creds, _ = google.auth.default(scopes=SCOPES)
        return creds


class GCloudPendingOperation(PendingOperation):
    """A global operation from GCE, such as an image deletion."""

    def __init__(
        self,
        compute: Any,
        project: str,
        operation: Dict[str, Any],
        poll_interval: float = 5.0,
        timeout: float = 1800.0,
    ) -> None:
        """
        Create a GCloudPendingOperation.

        Args:
            compute
                The compute API resource from the Google API client.
            project (str)
                The project which owns the operation.
            operation (dict)
                The operation returned by the API call.
            poll_interval (float, optional)
                Seconds between two polls of the operation. Defaults to 5.
            timeout (float, optional)
                Seconds to wait for the operation to finish, 0 to wait forever.
                Defaults to 1800.
        """
        self.compute = compute
        self.project = project
        self.operation = operation
        self.poll_interval = poll_interval
        self.timeout = timeout

    @property
    def name(self) -> str:
        """Return the operation name."""
        return self.operation["name"]

    def _refresh(self) -> None:
        try:
            self.operation = (
                self.compute.globalOperations()
                .get(project=self.project, operation=self.name)
                .execute()
            )
        except HttpError as err:
            raise GCloudAPIError.from_http_error(err) from err

    def _errors(self) -> List[str]:
        errors = (self.operation.get("error") or {}).get("errors") or []
        return [e.get("message") or e.get("code", "") for e in errors]

    def wait(self) -> None:
        """
        Poll the operation until it's done.

        Raises:
            GCloudAPIError: when polling the operation fails.
            OperationFailedError: when the operation finished with errors.
            OperationTimeoutError: when the operation is not done after ``timeout`` seconds.
        """
        deadline = time.monotonic() + self.timeout if self.timeout else None
        while self.operation.get("status") != "DONE":
            if deadline is not None and time.monotonic() >= deadline:
                raise OperationTimeoutError(
                    f"Operation \"{self.name}\" did not finish after {self.timeout} seconds"
                )
            LOG.debug("Operation %s is %s", self.name, self.operation.get("status"))
            time.sleep(self.poll_interval)
            self._refresh()

        errors = self._errors()
        if errors:
            raise OperationFailedError(
                f"Operation \"{self.name}\" failed: {'; '.join(errors)}"
            )


class GCloudProvider(CloudProvider[GCloudCredentials]):
    """The Google Compute Engine images provider."""

    def __init__(self, credentials: GCloudCredentials, compute: Any = None) -> None:
        """
        Create an instance of GCloudProvider.

        Args:
            credentials (GCloudCredentials)
                credentials to use the Google Compute API.
            compute (optional)
                An already built compute API resource. Defaults to building one
                from ``credentials``.
        """
        self.project = credentials.project
        self.poll_interval = _seconds_from_environ("GCLOUD_OPERATION_POLL_INTERVAL", "5")
        self.timeout = _seconds_from_environ("GCLOUD_OPERATION_TIMEOUT", "1800")
        self.compute = compute or build(
            "compute", "v1", credentials=credentials.credentials, cache_discovery=False
        )

    @classmethod
    def from_credentials(cls, auth_data: Dict[str, Any]) -> 'GCloudProvider':
        """
        Create a GCloudProvider object using the incoming credentials.

        Args:
            auth_data (dict)
                Dictionary with the required data to instantiate the GCloudCredentials object.
        Returns:
            A new instance of GCloudProvider.
        """
        creds = GCloudCredentials(**auth_data)
        return cls(creds)

    def _delete_image(self, name: str) -> GCloudPendingOperation:
        try:
            operation = self.compute.images().delete(project=self.project, image=name).execute()
        except HttpError as err:
            raise GCloudAPIError.from_http_error(err) from err
        LOG.debug("Deletion of %s started with operation %s", name, operation.get("name"))
        return GCloudPendingOperation(
            self.compute,
            self.project,
            operation,
            poll_interval=self.poll_interval,
            timeout=self.timeout,
        )
