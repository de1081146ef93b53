# SPDX-License-Identifier: GPL-3.0-or-later
from argparse import ArgumentParser, Namespace


class Service:
    """
    Define a mix-in class to be inherited for access to specific services.

    Each service (e.g. a cloud provider client) is a subclass of Service which
    registers its command-line arguments in ``add_service_args`` and exposes
    the client through a property or method.

    Tasks inherit from the services they need, placed before GCloudTask in the
    bases, to get consistent argument handling.
    """

    def add_args(self) -> None:
        """Override the ``add_args`` method from GCloudTask to include the service args."""
        super_add_args = getattr(super(Service, self), "add_args", lambda: None)
        super_add_args()

        parser = getattr(self, "parser", ArgumentParser())
        self.add_service_args(parser)

    def add_service_args(self, parser: ArgumentParser) -> None:
        """
        Implement me in subclasses to add arguments particular to a service (if any).

        Make sure to call super() when overriding.
        """

    @property
    def _service_args(self) -> Namespace:
        """
        Return the arguments from the current Service subclass.

        Expected to be mixed in with a class providing "args" property.
        """
        if not hasattr(self, "args"):
            raise RuntimeError("BUG: Service inheritor must provide 'args'")
        return self.args
