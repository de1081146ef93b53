# SPDX-License-Identifier: GPL-3.0-or-later
from pubtools._gcloud.cloud_providers.base import (  # noqa: F401
    CloudAPIError,
    CloudCredentials,
    CloudProvider,
    PendingOperation,
)
from pubtools._gcloud.cloud_providers.gcloud import (  # noqa: F401
    GCloudAPIError,
    GCloudCredentials,
    GCloudPendingOperation,
    GCloudProvider,
    OperationFailedError,
    OperationTimeoutError,
)
