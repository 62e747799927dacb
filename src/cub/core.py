import logging
import os
from typing import Any, Callable, Optional, Tuple

from rich.console import Console

from .errors import CubError
from .errors_catalog import actionable_error
from .models import Configuration, RunResult, UpdateOutcome
from .services.command_runner import CommandRunner
from .services.composer import ComposerResolver
from .services.git_client import GitClient
from .services.lockfile import LockFile
from .services.publisher import CommitPublisher
from .services.synchronizer import RepositorySynchronizer
from .services.update_attempt import UpdateAttempt

console = Console()
logger = logging.getLogger("cub")


class CubUpdater:
    """Updates one Composer package and publishes the lock file change."""

    def __init__(
        self,
        config: Configuration,
        resolver=None,
        git_client=None,
    ):
        self.config = config

        env = dict(os.environ)
        env.setdefault("HOME", config.working_dir)
        self.command_runner = CommandRunner(logger=logger, env=env)

        self.git_client = git_client or GitClient(self.command_runner, git_bin=config.git_bin)
        self.resolver = resolver or ComposerResolver(
            command_runner=self.command_runner,
            composer_dir=config.composer_dir,
            lock_file=LockFile(config.lock_file),
            composer_bin=config.composer_bin,
            verbose=config.verbose,
        )
        self.synchronizer = RepositorySynchronizer(
            git_client=self.git_client,
            working_dir=config.working_dir,
            repo_uri=config.repo_uri,
            branch=config.branch,
            logger=logger,
        )
        self.update_attempt = UpdateAttempt(
            resolver=self.resolver,
            logger=logger,
            prefer_stable=config.prefer_stable,
        )
        self.publisher = CommitPublisher(
            git_client=self.git_client,
            lock_file_path=config.lock_file,
            logger=logger,
        )
        self.result: Optional[RunResult] = None

    def _attempt(self, name: str, callback: Callable, *args) -> Tuple[Any, Optional[Exception]]:
        logger.debug("Step started: %s", name)
        try:
            result = callback(*args)
        except Exception as exc:
            logger.debug("Step failed: %s", name, exc_info=True)
            return None, exc
        logger.debug("Step finished: %s", name)
        return result, None

    def _report_failure(self, message: str, error: Exception):
        console.print(f"[bold red]Error:[/bold red] {message}")
        logger.error("%s %s", message, error)

    def prepare(self):
        """Clone or open the working copy and mirror origin. Errors are fatal."""
        self.synchronizer.ensure_initialized()
        self.synchronizer.reset_to_origin()

    def update(self, package_name: str) -> RunResult:
        outcome, error = self._attempt("update_package", self.update_attempt.run, package_name)
        if error is not None:
            self._report_failure(actionable_error("update_failed", package=package_name), error)
            return RunResult.RESOLUTION_FAILED

        if not outcome.updated:
            return self._unchanged(outcome)

        _, error = self._attempt("create_commit", self.publisher.create_commit, outcome)
        if error is not None:
            self._report_failure(actionable_error("commit_failed", package=package_name), error)
            return RunResult.COMMIT_FAILED

        _, error = self._attempt("push_commit", self.publisher.push)
        if error is not None:
            self._report_failure(
                actionable_error("push_failed", package=package_name, branch=self.config.branch),
                error,
            )
            return RunResult.PUSH_FAILED

        console.print(
            f"[green]Pushed update of {package_name} "
            f"({outcome.old_display_version} to {outcome.new_display_version}).[/green]"
        )
        logger.info(
            "Pushed update of %s (%s to %s)",
            package_name,
            outcome.old_display_version,
            outcome.new_display_version,
        )
        return RunResult.PUBLISHED

    def _unchanged(self, outcome: UpdateOutcome) -> RunResult:
        if not outcome.resolved:
            logger.warning(
                "Resolver exited with status %s; package %s not updated",
                outcome.resolver_status,
                outcome.package_name,
            )
            return RunResult.NOT_RESOLVED

        logger.info("Package %s not updated", outcome.package_name)
        return RunResult.NO_CHANGE

    def resynchronize(self) -> bool:
        logger.debug("Resetting and cleaning repository")
        _, error = self._attempt("reset_to_origin", self.synchronizer.reset_to_origin)
        if error is not None:
            self._report_failure(actionable_error("cleanup_failed", branch=self.config.branch), error)
            return False
        return True

    def run(self, package_name: str) -> int:
        if not package_name:
            raise CubError("No package specified.")

        logger.info("Updating %s in %s (%s)", package_name, self.config.repo_uri, self.config.branch)
        self.prepare()

        result = RunResult.RESOLUTION_FAILED
        try:
            result = self.update(package_name)
        finally:
            if not self.resynchronize():
                result = RunResult.CLEANUP_FAILED

        self.result = result
        logger.debug("Run finished: %s", result.value)
        return result.exit_code
