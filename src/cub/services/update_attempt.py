"""Targeted single-package resolution."""

from cub.errors import CubError
from cub.models import ResolverOptions, UpdateOutcome
from cub.services.change_detector import ChangeDetector


class UpdateAttempt:
    """Runs the resolver restricted to one package and reports what changed."""

    def __init__(self, resolver, logger, prefer_stable: bool = True, change_detector=None):
        self.resolver = resolver
        self.logger = logger
        self.prefer_stable = prefer_stable
        self.change_detector = change_detector or ChangeDetector()

    def build_options(self, package_name: str) -> ResolverOptions:
        return ResolverOptions(
            target_packages=frozenset([package_name]),
            prefer_stable=self.prefer_stable,
            prefer_lowest=False,
            include_dev_dependencies=False,
            run_scripts=False,
            write_lock_on_success=True,
            ignore_platform_constraints=True,
            execute_install_operations=False,
        )

    def run(self, package_name: str) -> UpdateOutcome:
        result = self.resolver.resolve(self.build_options(package_name))

        if not result.succeeded:
            self.logger.debug("Resolver exited with status %s for %s", result.status, package_name)
            return UpdateOutcome.unchanged(package_name, resolver_status=result.status)

        before = result.before.get(package_name)
        after = result.after.get(package_name)

        if before is None or before.version is None:
            raise CubError("Could not determine current package version (lock data not found)")
        if after is None or after.version is None:
            raise CubError("Could not determine new package version (lock data not found)")

        return self.change_detector.compare(before, after)
