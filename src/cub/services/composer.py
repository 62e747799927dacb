"""Composer-backed dependency resolver."""

from typing import Dict, List, Optional

from cub.models import LockSnapshot, ResolutionResult, ResolverOptions
from cub.services.command_runner import CommandRunner
from cub.services.lockfile import LockFile


class ComposerResolver:
    """Runs ``composer update`` for a set of target packages."""

    def __init__(
        self,
        command_runner: CommandRunner,
        composer_dir: str,
        lock_file: LockFile,
        composer_bin: str = "composer",
        verbose: bool = False,
    ):
        self.command_runner = command_runner
        self.composer_dir = composer_dir
        self.lock_file = lock_file
        self.composer_bin = composer_bin
        self.verbose = verbose

    def build_command(self, options: ResolverOptions) -> List[str]:
        cmd = [self.composer_bin, "update", *sorted(options.target_packages)]
        cmd += [
            "--with-dependencies",
            "--no-interaction",
            "--no-plugins",
            "--no-autoloader",
            "--prefer-dist",
        ]
        if not options.run_scripts:
            cmd.append("--no-scripts")
        if not options.include_dev_dependencies:
            cmd.append("--no-dev")
        if not options.execute_install_operations:
            cmd.append("--no-install")
        if options.ignore_platform_constraints:
            cmd.append("--ignore-platform-reqs")
        if options.prefer_stable:
            cmd.append("--prefer-stable")
        if options.prefer_lowest:
            cmd.append("--prefer-lowest")
        if not options.write_lock_on_success:
            cmd.append("--dry-run")
        cmd.append("-v" if self.verbose else "--no-progress")
        cmd += ["--working-dir", self.composer_dir]
        return cmd

    def resolve(self, options: ResolverOptions) -> ResolutionResult:
        before = self._snapshots(options)
        result = self.command_runner.run(
            self.build_command(options),
            check=False,
            capture_output=not self.verbose,
        )
        after = self._snapshots(options) if result.returncode == 0 else {}
        return ResolutionResult(status=result.returncode, before=before, after=after)

    def _snapshots(self, options: ResolverOptions) -> Dict[str, Optional[LockSnapshot]]:
        return {name: self.lock_file.find(name) for name in options.target_packages}
