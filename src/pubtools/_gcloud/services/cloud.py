# SPDX-License-Identifier: GPL-3.0-or-later
import base64
import json
import logging
import os
import threading
from argparse import ArgumentParser
from typing import Any, Dict, Optional

from ..arguments import from_environ
from ..cloud_providers import CloudProvider, GCloudProvider
from .base import Service

log = logging.getLogger("pubtools.gcloud")


class CloudService(Service):
    """
    Define the service for managing images on Google Compute Engine.

    The provider is built from ``--credentials`` or, with ``--service-auth``,
    from the application default credentials.
    """

    def __init__(self, *args, **kwargs) -> None:
        """Instantiate a CloudService object."""
        self._instance: Optional[CloudProvider] = None
        self._lock = threading.Lock()
        super(CloudService, self).__init__(*args, **kwargs)

    def add_service_args(self, parser: ArgumentParser) -> None:
        """
        Add the required CLI arguments for CloudService.

        Args:
            parser (ArgumentParser)
                The parser to include the additional arguments.
        """
        super(CloudService, self).add_service_args(parser)

        group = parser.add_argument_group("Cloud Service")

        group.add_argument(
            "--credentials",
            help="Path to a service account JSON key or the base64 encoded key "
            "(or set GCLOUD_CREDENTIALS environment variable)",
            type=from_environ("GCLOUD_CREDENTIALS"),
            default="",
        )
        group.add_argument(
            "--project",
            help="Google Cloud project (or set GCLOUD_PROJECT environment variable); "
            "defaults to the project of the service account key",
            type=from_environ("GCLOUD_PROJECT"),
            default="",
        )
        group.add_argument(
            "--service-auth",
            help="Use the application default credentials instead of a service account key",
            action="store_true",
        )

    def _load_key(self) -> Optional[Dict[str, Any]]:
        """Load the service account key from a file or a base64 encoded string."""
        key = self._service_args.credentials
        if not key:
            return None

        if os.path.isfile(key):
            with open(key, 'r') as fp:
                return json.load(fp)

        try:
            b_data = base64.b64decode(key.encode("ascii"))
            return json.loads(b_data.decode("ascii"))
        except Exception as e:
            message = "Invalid credentials"
            log.error(f"{message} : {e}")
            raise ValueError(message) from e

    def _get_auth_data(self) -> Dict[str, Any]:
        """
        Return the data to build the provider credentials.

        Returns:
            dict: The keyword arguments for GCloudCredentials.
        """
        key = None if self._service_args.service_auth else self._load_key()
        if key is None and not self._service_args.service_auth:
            CloudProvider.raise_error(
                ValueError, "Missing credentials: provide \"--credentials\" or \"--service-auth\"."
            )

        project = self._service_args.project or (key or {}).get("project_id")
        if not project:
            CloudProvider.raise_error(
                ValueError, "Missing Google Cloud project: provide \"--project\"."
            )

        return {"project": project, "service_account_info": key}

    def cloud_instance(self) -> CloudProvider:
        """Return the instance of CloudProvider for the requested project."""
        with self._lock:
            if self._instance is None:
                self._instance = GCloudProvider.from_credentials(self._get_auth_data())
        return self._instance
