"""Subprocess execution service for cub."""

import subprocess
from typing import List, Mapping, Optional

from cub.errors import CubError


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger, env: Optional[Mapping[str, str]] = None):
        self.logger = logger
        self.env = dict(env) if env is not None else None

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        cwd: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                cwd=cwd,
                env=self.env,
            )
        except FileNotFoundError as exc:
            raise CubError(
                f"Required command not found: {cmd[0]}. Please install it and try again."
            ) from exc
        except Exception as exc:
            raise CubError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        details = ""
        if capture_output:
            # git reports some failures (e.g. "nothing to commit") on stdout
            details = (result.stderr or "").strip() or (result.stdout or "").strip()
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if details:
            message = f"{message}\n{details}"

        if check:
            raise CubError(message)

        self.logger.warning(message)
        return result
