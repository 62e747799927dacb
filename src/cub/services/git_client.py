"""Git working copy client built on the git command line."""

import os
from typing import Iterable, Optional

from cub.errors import CubError
from cub.services.command_runner import CommandRunner


class GitClient:
    """Source control client bound to a single working copy."""

    def __init__(self, command_runner: CommandRunner, git_bin: str = "git"):
        self.command_runner = command_runner
        self.git_bin = git_bin
        self.working_dir: Optional[str] = None

    def clone(self, uri: str, path: str, branch: Optional[str] = None):
        cmd = [self.git_bin, "clone"]
        if branch:
            cmd += ["--branch", branch]
        cmd += [uri, path]
        self.command_runner.run(cmd, capture_output=True)
        self.working_dir = path

    def open(self, path: str):
        if not os.path.isdir(os.path.join(path, ".git")):
            raise CubError(f"Not a git working copy: {path}")
        self.working_dir = path

    def fetch(self, remote: str, branch: str):
        self._git("fetch", remote, branch)

    def switch(self, branch: str, start_point: str):
        """Check out `branch`, recreated at `start_point` and tracking it."""
        self._git("checkout", "-f", "--track", "-B", branch, start_point)

    def reset(self, target: str, hard: bool = True):
        args = ["reset"]
        if hard:
            args.append("--hard")
        self._git(*args, target)

    def clean(self, untracked_files: bool = True, untracked_dirs: bool = True, ignored: bool = True):
        args = ["clean"]
        if untracked_dirs:
            args.append("-d")
        if ignored:
            args.append("-x")
        if untracked_files:
            args.append("-f")
        self._git(*args)

    def checkout(self, paths: Iterable[str] = (".",)):
        self._git("checkout", "--", *paths)

    def stage(self, path: str):
        self._git("add", "--", path)

    def commit(self, message: str):
        self._git("commit", "-m", message)

    def push(self):
        self._git("push")

    def _git(self, *args: str):
        if self.working_dir is None:
            raise CubError("Git working copy is not initialized.")
        return self.command_runner.run(
            [self.git_bin, *args],
            capture_output=True,
            cwd=self.working_dir,
        )
