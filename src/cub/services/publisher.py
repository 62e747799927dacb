"""Commit and push of a lock file update."""

from cub.models import UpdateOutcome


class CommitPublisher:
    def __init__(self, git_client, lock_file_path: str, logger):
        self.git = git_client
        self.lock_file_path = lock_file_path
        self.logger = logger

    @staticmethod
    def commit_message(outcome: UpdateOutcome) -> str:
        return (
            f"Updating {outcome.package_name} ({outcome.old_display_version}) "
            f"to {outcome.new_display_version}"
        )

    def create_commit(self, outcome: UpdateOutcome) -> str:
        message = self.commit_message(outcome)
        self.git.stage(self.lock_file_path)
        self.git.commit(message)
        self.logger.debug("Created commit: %s", message)
        return message

    def push(self):
        self.git.push()
