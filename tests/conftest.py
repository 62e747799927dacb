import json
import os
import subprocess
from pathlib import Path

import pytest

from cub.models import Configuration, ResolutionResult
from cub.services.lockfile import LockFile

PACKAGE = "acme/widgets"


def git(cwd, *args) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def lock_entry(name=PACKAGE, version="1.2.0", reference="a" * 40):
    return {
        "name": name,
        "version": version,
        "source": {"type": "git", "url": f"https://example.com/{name}.git", "reference": reference},
    }


def write_lock(path, packages):
    Path(path).write_text(
        json.dumps({"content-hash": "x", "packages": packages, "packages-dev": []}, indent=4) + "\n",
        encoding="utf-8",
    )


class FakeResolver:
    """In-memory resolver that rewrites the lock file like Composer would."""

    def __init__(self, lock_path, status=0, new_packages=None, before=None, after=None, side_effect=None):
        self.lock_file = LockFile(lock_path)
        self.status = status
        self.new_packages = new_packages
        self.before = before
        self.after = after
        self.side_effect = side_effect
        self.calls = []

    def resolve(self, options):
        self.calls.append(options)
        before = self.before or {name: self.lock_file.find(name) for name in options.target_packages}
        if self.side_effect is not None:
            self.side_effect()
        if self.new_packages is not None:
            write_lock(self.lock_file.path, self.new_packages)
        if self.status != 0:
            return ResolutionResult(status=self.status, before=before)
        after = self.after or {name: self.lock_file.find(name) for name in options.target_packages}
        return ResolutionResult(status=0, before=before, after=after)


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "cub")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "cub@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "cub")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "cub@example.com")
    return home


@pytest.fixture
def remote_repo(tmp_path, git_env):
    remote = tmp_path / "remote.git"
    git(tmp_path, "init", "--bare", str(remote))

    seed = tmp_path / "seed"
    git(tmp_path, "clone", str(remote), str(seed))
    git(seed, "checkout", "-b", "develop")
    (seed / "composer.json").write_text(
        json.dumps({"require": {PACKAGE: "^1.0"}}, indent=4) + "\n",
        encoding="utf-8",
    )
    write_lock(seed / "composer.lock", [lock_entry(), lock_entry("acme/other", "2.0.0", "b" * 40)])
    git(seed, "add", ".")
    git(seed, "commit", "-m", "Initial commit")
    git(seed, "push", "origin", "develop")
    return remote


@pytest.fixture
def config(tmp_path, remote_repo):
    return Configuration(
        working_dir=str(tmp_path / "work"),
        repo_uri=str(remote_repo),
        branch="develop",
    )


def remote_head(remote, branch="develop") -> str:
    return git(remote, "rev-parse", branch)


def tree_state(root):
    state = {}
    for current_root, dirs, files in os.walk(root):
        dirs[:] = [name for name in dirs if name != ".git"]
        for file_name in files:
            path = Path(current_root, file_name)
            state[str(path.relative_to(root))] = path.read_bytes()
    return state


def push_diverging_branch(seed, branch):
    """Publish ``branch`` with one commit that develop does not have."""
    git(seed, "checkout", "-b", branch, "develop")
    (seed / "NOTES.md").write_text(f"{branch} only\n", encoding="utf-8")
    git(seed, "add", "NOTES.md")
    git(seed, "commit", "-m", f"Work on {branch}")
    git(seed, "push", "origin", branch)
    git(seed, "checkout", "develop")
