# SPDX-License-Identifier: GPL-3.0-or-later
import copy
import os
from argparse import Action, ArgumentParser, Namespace
from typing import Any, Callable, List, Optional, Sequence, Union


class SplitAndExtend(Action):
    """
    Split the incoming values and extend the destination list with them.

    It can be used to accept ``--option a,b --option c`` and turn it into
    ``["a", "b", "c"]``.
    """

    def __init__(self, *args, split_on: str = ",", **kwargs) -> None:
        """
        Instantiate the SplitAndExtend action.

        Args:
            split_on (str, optional)
                The delimiter for splitting the values. Defaults to ``,``.
        """
        self.split_on = split_on
        super(SplitAndExtend, self).__init__(*args, **kwargs)

    def __call__(
        self,
        parser: ArgumentParser,
        namespace: Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Split the values and store them into the namespace."""
        if not values:
            return

        if isinstance(values, str):
            values = [values]

        current: List[str] = copy.copy(getattr(namespace, self.dest, None) or [])
        for value in values:
            current.extend(value.split(self.split_on))
        setattr(namespace, self.dest, current)


def from_environ(key: str, delegate_converter: Callable[[str], Any] = lambda x: x):
    """
    Return an argparse converter which falls back to an environment variable.

    When the value received from the command line is empty the content of
    the environment variable ``key`` is used instead. Combined with
    ``default=""`` it allows options to be set either way.

    Args:
        key (str)
            The environment variable name.
        delegate_converter (callable, optional)
            Another converter to apply on the resulting value.
    Returns:
        The converter function.
    """

    def new_converter(value: str) -> Any:
        if not value:
            value = os.environ.get(key) or ""
        return delegate_converter(value)

    return new_converter
