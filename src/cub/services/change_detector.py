"""Before/after comparison of lock snapshots."""

from typing import Optional

from cub.models import (
    SHORT_REFERENCE_LENGTH,
    UNSTABLE_VERSION_PREFIX,
    LockSnapshot,
    UpdateOutcome,
)


class ChangeDetector:
    """Decides whether a resolution changed the locked revision of a package.

    Snapshots are compared by source reference, never by version label: two
    ``dev-main`` snapshots can point at different commits.
    """

    def compare(self, before: LockSnapshot, after: LockSnapshot) -> UpdateOutcome:
        return UpdateOutcome(
            package_name=after.name,
            updated=before.source_reference != after.source_reference,
            old_display_version=self.display_version(before),
            new_display_version=self.display_version(after),
        )

    @staticmethod
    def display_version(snapshot: LockSnapshot) -> Optional[str]:
        version = snapshot.version
        if not version or not version.startswith(UNSTABLE_VERSION_PREFIX):
            return version
        if not snapshot.source_reference:
            return version
        return snapshot.source_reference[:SHORT_REFERENCE_LENGTH]
