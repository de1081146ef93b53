# SPDX-License-Identifier: GPL-3.0-or-later
from .command import GCloudDeleteImages


def entry_point(cls=GCloudDeleteImages):
    """Define the CLI entrypoint for the ``delete-images`` command."""
    cls().main()


def doc_parser():
    """Define the doc_parser for the ``delete-images`` command."""
    return GCloudDeleteImages().parser
