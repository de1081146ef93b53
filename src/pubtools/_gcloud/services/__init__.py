# SPDX-License-Identifier: GPL-3.0-or-later
from .base import Service  # noqa: F401
from .cloud import CloudService  # noqa: F401
