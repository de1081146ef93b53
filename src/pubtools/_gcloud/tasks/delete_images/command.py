# SPDX-License-Identifier: GPL-3.0-or-later
import json
import logging
import sys
from typing import Dict, List

from ...arguments import SplitAndExtend
from ...cloud_providers import CloudAPIError, PendingOperation
from ...services import CloudService
from ...task import GCloudTask

LOG = logging.getLogger("pubtools.gcloud")

step = GCloudTask.step


class GCloudDeleteImages(CloudService, GCloudTask):
    """Delete images from Google Compute Engine.

    Every deletion is requested first, then the command waits for all of them
    to complete. A failed image doesn't stop the others from being deleted.
    """

    def __init__(self, *args, **kwargs):
        """Initialize the GCloudDeleteImages instance."""
        self._failed = False
        super(GCloudDeleteImages, self).__init__(*args, **kwargs)

    @property
    def image_names(self) -> List[str]:
        """Return the image names received from the command line."""
        return [name for name in self.args.names if name]

    def _report_failure(self, name: str, error: Exception) -> None:
        # Double quoted, with quotes and backslashes in the name escaped.
        quoted = json.dumps(name, ensure_ascii=False)
        print(f"Deleting {quoted} failed: {error}", file=sys.stderr)
        self._failed = True

    @step("delete images")
    def delete_images(self, names: List[str]) -> Dict[str, PendingOperation]:
        """
        Request the deletion of all images.

        Args:
            names (list)
                The image names to delete, in order.
        Returns:
            The pending deletions by image name.
        """
        pendings: Dict[str, PendingOperation] = {}
        if self.args.dry_run:
            for name in names:
                LOG.info("Would have deleted: %s", name)
            return pendings

        provider = self.cloud_instance()
        for name in names:
            LOG.info("Deleting %s", name)
            try:
                pendings[name] = provider.delete_image(name)
            except Exception as err:
                if isinstance(err, CloudAPIError) and err.not_found and self.args.allow_missing:
                    LOG.info("%s", err)
                    continue
                self._report_failure(name, err)
        return pendings

    @step("wait for deletions")
    def wait_deletions(self, pendings: Dict[str, PendingOperation]) -> None:
        """
        Wait for all pending deletions to complete.

        Args:
            pendings (dict)
                The pending deletions by image name.
        """
        for name, pending in pendings.items():
            try:
                pending.wait()
            except Exception as err:
                self._report_failure(name, err)
                continue
            LOG.info("Deleted %s", name)

    def add_args(self):
        """Include the required CLI arguments for GCloudDeleteImages."""
        super(GCloudDeleteImages, self).add_args()

        self.parser.add_argument(
            "--allow-missing",
            help="Do not error out on the image not existing",
            action="store_true",
        )

        self.parser.add_argument(
            "--dry-run",
            help="Skip destructive actions on Google Cloud",
            action="store_true",
        )

        self.parser.add_argument(
            "--skip",
            help="skip given comma-separated sub-steps",
            type=str,
            action=SplitAndExtend,
            split_on=",",
            default=[],
        )

        self.parser.add_argument(
            "names",
            nargs="*",
            metavar="name",
            help="Name(s) of the images to delete",
            action=SplitAndExtend,
            split_on=",",
            default=[],
        )

    def run(self) -> int:
        """Execute the delete images workflow."""
        names = self.image_names
        if not names:
            sys.stderr.write("Specify image name(s).\n")
            sys.exit(2)

        pendings = self.delete_images(names)
        if pendings:
            self.wait_deletions(pendings)

        if self._failed:
            LOG.error("Delete failed")
            return 1
        LOG.info("Delete completed")
        return 0
