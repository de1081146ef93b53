# SPDX-License-Identifier: GPL-3.0-or-later
import logging
from typing import Any, Callable

LOG = logging.getLogger("pubtools.gcloud")


class StepDecorator(object):
    """Implementation of GCloudTask.step decorator. See that method for more info."""

    def __init__(self, name: str):
        """
        Instantiate the StepDecorator.

        Args:
            name (str)
                The name of the step.
        """
        self._name = name

    @property
    def human_name(self) -> str:
        """Return the step name."""
        return self._name

    @property
    def machine_name(self) -> str:
        """Return the machine readable step name."""
        return self._name.replace(" ", "-").lower()

    def __call__(self, fn: Callable[..., Any]):
        """
        Implement the step decorator when called.

        Args:
            fn (callable)
                The callable to be decorated.
        Returns:
            The step decorated callable.
        """

        def new_fn(instance, *args, **kwargs):
            if self.should_skip(instance):
                LOG.info(
                    "%s: skipped",
                    self.human_name,
                    extra={"event": {"type": "%s-skip" % self.machine_name}},
                )
                return None

            logger = StepLogger(self)
            logger.log_start()

            try:
                ret = fn(instance, *args, **kwargs)
            except SystemExit as exc:
                if exc.code == 0:
                    logger.log_return()
                else:
                    logger.log_error()
                raise
            except Exception:
                logger.log_error()
                raise

            logger.log_return()
            return ret

        new_fn.__name__ = fn.__name__
        new_fn.__doc__ = fn.__doc__
        return new_fn

    def should_skip(self, instance: Any) -> bool:
        """
        Check whether the step was requested to be skipped.

        Args:
            instance (object)
                The task instance whose ``args.skip`` lists the steps to skip.
        Returns:
            True if the step machine name is in ``args.skip``. False otherwise.
        """
        skip = getattr(instance.args, "skip", None) or []
        return self.machine_name in skip


class StepLogger(object):
    """
    Implement the logging when entering/exiting/failing a step.

    The main point of this class is to keep track of whether entering a step has been logged
    and make sure exiting a step can't be logged before entering.
    """

    def __init__(self, step: StepDecorator):
        """
        Instantiate the StepLogger.

        Args:
            step (StepDecorator)
                The step to log for.
        """
        self.step = step
        self.log_opened = False

    def log_start(self) -> None:
        """Log a step start."""
        if self.log_opened:
            return
        self.log_opened = True

        LOG.info(
            "%s: started",
            self.step.human_name,
            extra={"event": {"type": "%s-start" % self.step.machine_name}},
        )

    def log_error(self) -> None:
        """Log a step error."""
        self.log_start()

        LOG.error(
            "%s: failed",
            self.step.human_name,
            extra={"event": {"type": "%s-error" % self.step.machine_name}},
        )

    def log_return(self) -> None:
        """Log a completed step."""
        self.log_start()

        LOG.info(
            "%s: finished",
            self.step.human_name,
            extra={"event": {"type": "%s-end" % self.step.machine_name}},
        )
