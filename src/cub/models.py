"""Shared domain models for cub."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional

UNSTABLE_VERSION_PREFIX = "dev-"
SHORT_REFERENCE_LENGTH = 7


@dataclass(frozen=True)
class Configuration:
    """Settings for one run, built once by the CLI."""

    working_dir: str
    repo_uri: str
    branch: str = "develop"
    verbose: bool = False
    prefer_stable: bool = True
    composer_json_dir: Optional[str] = None
    composer_bin: str = "composer"
    git_bin: str = "git"

    @property
    def composer_dir(self) -> str:
        if not self.composer_json_dir:
            return self.working_dir
        return os.path.normpath(os.path.join(self.working_dir, self.composer_json_dir))

    @property
    def lock_file(self) -> str:
        return os.path.join(self.composer_dir, "composer.lock")


@dataclass(frozen=True)
class LockSnapshot:
    """Resolved state of one package as recorded in the lock file."""

    name: str
    version: Optional[str]
    source_reference: Optional[str]


@dataclass(frozen=True)
class UpdateOutcome:
    package_name: str
    updated: bool
    old_display_version: Optional[str] = None
    new_display_version: Optional[str] = None
    resolver_status: int = 0

    @property
    def resolved(self) -> bool:
        return self.resolver_status == 0

    @classmethod
    def unchanged(cls, package_name: str, resolver_status: int = 0) -> "UpdateOutcome":
        return cls(package_name=package_name, updated=False, resolver_status=resolver_status)


@dataclass(frozen=True)
class ResolverOptions:
    """Options table handed to the dependency resolver."""

    target_packages: FrozenSet[str]
    prefer_stable: bool = True
    prefer_lowest: bool = False
    include_dev_dependencies: bool = False
    run_scripts: bool = False
    write_lock_on_success: bool = True
    ignore_platform_constraints: bool = True
    execute_install_operations: bool = False


@dataclass(frozen=True)
class ResolutionResult:
    status: int
    before: Dict[str, Optional[LockSnapshot]] = field(default_factory=dict)
    after: Dict[str, Optional[LockSnapshot]] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == 0


class RunResult(Enum):
    """Terminal state of one invocation."""

    NO_CHANGE = "no_change"
    NOT_RESOLVED = "not_resolved"
    PUBLISHED = "published"
    RESOLUTION_FAILED = "resolution_failed"
    COMMIT_FAILED = "commit_failed"
    PUSH_FAILED = "push_failed"
    INIT_FAILED = "init_failed"
    CLEANUP_FAILED = "cleanup_failed"

    @property
    def exit_code(self) -> int:
        if self in (RunResult.NO_CHANGE, RunResult.NOT_RESOLVED, RunResult.PUBLISHED):
            return 0
        return 1
