"""Keeps the working copy an exact mirror of the remote tracking branch."""

import os

from cub.errors import CubError
from cub.errors_catalog import actionable_error


class RepositorySynchronizer:
    """Clones or opens the working copy and resets it to origin."""

    REMOTE = "origin"

    def __init__(self, git_client, working_dir: str, repo_uri: str, branch: str, logger):
        self.git = git_client
        self.working_dir = working_dir
        self.repo_uri = repo_uri
        self.branch = branch
        self.logger = logger

    def is_initialized(self) -> bool:
        return os.path.isdir(os.path.join(self.working_dir, ".git"))

    def ensure_initialized(self):
        try:
            if self.is_initialized():
                self.logger.debug("Opening working copy at %s", self.working_dir)
                self.git.open(self.working_dir)
            else:
                self.logger.info("Cloning %s into %s", self.repo_uri, self.working_dir)
                self.git.clone(self.repo_uri, self.working_dir, branch=self.branch)
        except CubError as exc:
            raise CubError(
                f"{actionable_error('repository_init_failed', path=self.working_dir)}\n{exc}"
            ) from exc

    def reset_to_origin(self):
        """Check out the branch at origin and drop every local change, ignored files included."""
        target = f"{self.REMOTE}/{self.branch}"
        self.git.fetch(self.REMOTE, self.branch)
        self.git.switch(self.branch, target)
        self.git.reset(target, hard=True)
        self.git.clean(untracked_files=True, untracked_dirs=True, ignored=True)
        self.git.checkout(["."])
