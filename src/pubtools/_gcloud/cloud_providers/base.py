# SPDX-License-Identifier: GPL-3.0-or-later
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, NoReturn, Type, TypeVar

from attrs import Attribute, field, frozen
from attrs.validators import instance_of

log = logging.getLogger("pubtools.gcloud")


class CloudAPIError(Exception):
    """A structured error returned by a cloud provider API."""

    NOT_FOUND = 404

    def __init__(self, status_code: int, message: str) -> None:
        """
        Create a CloudAPIError.

        Args:
            status_code (int)
                The HTTP-equivalent status code of the failure.
            message (str)
                The error message from the API.
        """
        super(CloudAPIError, self).__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def not_found(self) -> bool:
        """Return whether the requested resource does not exist."""
        return self.status_code == self.NOT_FOUND


@frozen
class CloudCredentials:
    """The base class for a cloud provider credentials."""

    project: str = field(validator=instance_of(str))
    """The project which owns the resources."""

    @project.validator
    def _validate_project(self, attribute: Attribute, value: str):
        """Validate the project is not empty."""
        if not value.strip():
            raise ValueError(f"Invalid value for {attribute.name}: must not be empty.")


C = TypeVar("C", bound=CloudCredentials)


class PendingOperation(ABC):
    """An in-flight asynchronous operation on a cloud provider."""

    @abstractmethod
    def wait(self) -> None:
        """
        Block until the operation is complete.

        Raises:
            Exception: when the operation could not complete successfully.
        """


class CloudProvider(ABC, Generic[C]):
    """
    The base class for cloud image providers.

    Each subclass must implement all private abstract methods.

    The public methods are not inteded to be overriden.
    """

    @classmethod
    @abstractmethod
    def from_credentials(cls, auth_data: Dict[str, Any]) -> 'CloudProvider':
        """
        Abstract method for a factory of a CloudProvider subclass using the given credentials.

        Args:
            auth_data (dict)
                Dictionary with the required data to instantiate the object.
        Returns:
            The requested object
        """

    @abstractmethod
    def _delete_image(self, name: str) -> PendingOperation:
        """
        Abstract method for requesting the deletion of an image.

        Args:
            name (str)
                The image name.
        Returns:
            The pending operation for the deletion.
        Raises:
            CloudAPIError: when the API refuses the request.
        """

    @staticmethod
    def raise_error(exception: Type[Exception], message: str) -> NoReturn:
        """
        Log and raise an error.

        Args
            exception (Exception)
                The exception type to raise.
            message (str)
                The error message.
        Raises:
            Exception: the requested exception with the incoming message.
        """
        log.error(message)
        raise exception(message)

    def delete_image(self, name: str) -> PendingOperation:
        """
        Request the deletion of an image.

        The deletion happens asynchronously: use ``wait`` on the returned
        operation to block until it is done.

        Args:
            name (str)
                The image name.
        Returns:
            The pending operation for the deletion.
        """
        log.debug("Requesting the deletion of image %s", name)
        return self._delete_image(name)
