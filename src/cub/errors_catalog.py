"""Actionable error catalog for cub."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "repository_init_failed": {
        "what": "Could not prepare working copy at {path}.",
        "next": "Check the repository URI, credentials and that {path} is writable.",
    },
    "lock_data_invalid": {
        "what": "Invalid lock data structure in {path}.",
        "next": "Make sure the branch contains a composer.lock generated by Composer.",
    },
    "update_failed": {
        "what": "Failed to update package {package}.",
        "next": "Run `composer update {package}` manually to inspect the resolver output.",
    },
    "commit_failed": {
        "what": "Failed to create commit for update of {package}.",
        "next": "Check the git identity configured for this user and the lock file path.",
    },
    "push_failed": {
        "what": "Failed to push update of {package}.",
        "next": "Verify push access to the remote and that {branch} accepts fast-forward pushes.",
    },
    "cleanup_failed": {
        "what": "Could not reset working copy to origin/{branch}.",
        "next": "Inspect the working copy manually before the next run.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
