# SPDX-License-Identifier: GPL-3.0-or-later
import inspect
import logging
import sys
import traceback
from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from typing import Optional

from pubtools.pluggy import pm

from .step import StepDecorator

LOG = logging.getLogger("pubtools.gcloud")
LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(message)s"


class GCloudTask(object):
    """Base class for GCloud CLI tasks.

    Instances of GCloudTask subclass may obtain arguments by invoking the
    :meth:`add_args` method.
    """

    step = StepDecorator
    """
    A decorator to mark task methods as steps.

    Each step logs when it starts, finishes or fails. A step can be skipped
    by passing its name (lowercase, words joined by ``-``) to ``--skip``.
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize the GCloudTask."""
        super(GCloudTask, self).__init__(*args, **kwargs)
        self._args: Optional[Namespace] = None

        self.parser = ArgumentParser(
            description=self.description, formatter_class=RawDescriptionHelpFormatter
        )
        self._basic_args()
        self.add_args()

    def __enter__(self) -> 'GCloudTask':
        """Enter the context manager."""
        return self

    def __exit__(self, *args, **kwargs) -> None:
        """Exit the context manager."""

    @property
    def description(self) -> str:
        """Return the description of the task, taken from the class docstring."""
        doc = self.__doc__ or ""
        return inspect.cleandoc(doc)

    @property
    def args(self) -> Namespace:
        """Parse the CLI arguments and return them."""
        if self._args is None:
            self._args = self.parser.parse_args()
        return self._args

    def run(self) -> int:
        """
        Implement a specific task.

        Returns:
            The exit code for the process.
        """
        raise NotImplementedError()

    def _basic_args(self) -> None:
        # minimum args required for a CLI task
        self.parser.add_argument(
            "-d",
            "--debug",
            action="count",
            default=0,
            help=(
                "Show debug logs; can be provided up to three times "
                "to enable more logs"
            ),
        )

    def _setup_logging(self) -> None:
        level = logging.INFO
        logging.basicConfig(level=level, format=LOG_FORMAT)

        # Tier 1: loggers from this project.
        # Tier 2: loggers from the pubtools family.
        # Tier 3: everything else.
        levels = {
            1: ["pubtools.gcloud"],
            2: ["pubtools"],
            3: [""],
        }
        for tier in range(1, min(self.args.debug, 3) + 1):
            for name in levels[tier]:
                logging.getLogger(name).setLevel(logging.DEBUG)

    def add_args(self) -> None:
        """
        Add parser options/arguments for a task.

        e.g. self.parser.add_argument("option", help="help text")
        """

    def main(self) -> int:
        """
        Execute the task's main entrypoint.

        Returns:
            0 on success. Any other exit code terminates the process with it.
        """
        self._setup_logging()
        pm.hook.task_start()
        failed = True
        try:
            exit_code = self.run()
            failed = bool(exit_code)
        except Exception:
            traceback.print_exc(file=sys.stderr)
            raise
        finally:
            pm.hook.task_stop(failed=failed)

        if exit_code:
            sys.exit(exit_code)
        return 0
