import logging
import os

import click
from rich.logging import RichHandler

from .core import CubUpdater
from .errors import CubError
from .models import Configuration, RunResult
from .services.config_loader import ConfigLoader

DEFAULT_CONFIG_FILE = ".cub.yml"


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
)


@click.command()
@click.argument("package")
@click.option(
    "--working-dir",
    envvar="WORKING_DIR",
    required=False,
    type=click.Path(file_okay=False),
    help="Path of the git working copy (default: current directory).",
)
@click.option(
    "--composer-json-dir",
    envvar="COMPOSER_JSON_DIR",
    required=False,
    help="Directory holding composer.json, relative to the working copy.",
)
@click.option("--repo", envvar="REPO", required=False, help="URI of the repository to clone.")
@click.option(
    "--branch",
    envvar="BRANCH",
    required=False,
    help="Branch to update and push (default: develop).",
)
@click.option("--verbose", envvar="VERBOSE", is_flag=True, default=None, help="Enable verbose logging")
@click.option(
    "--prefer-stable/--no-prefer-stable",
    envvar="PREFER_STABLE",
    default=None,
    help="Prefer stable versions when resolving (default: enabled).",
)
@click.option("--composer-bin", required=False, help="Composer executable (default: composer).")
@click.option("--git-bin", required=False, help="Git executable (default: git).")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
def main(
    package,
    working_dir,
    composer_json_dir,
    repo,
    branch,
    verbose,
    prefer_stable,
    composer_bin,
    git_bin,
    log_file,
    config,
):
    """Update PACKAGE in the Composer lock file and push the change."""
    logger = logging.getLogger("cub")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except CubError as exc:
        raise click.ClickException(str(exc)) from exc

    working_dir = _resolve_option(working_dir, config_values, "working_dir") or os.getcwd()
    composer_json_dir = _resolve_option(composer_json_dir, config_values, "composer_json_dir")
    repo = _resolve_option(repo, config_values, "repo")
    branch = str(_resolve_option(branch, config_values, "branch", default="develop"))
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    prefer_stable = bool(_resolve_option(prefer_stable, config_values, "prefer_stable", default=True))
    composer_bin = _resolve_option(composer_bin, config_values, "composer_bin", default="composer")
    git_bin = _resolve_option(git_bin, config_values, "git_bin", default="git")
    log_file = _resolve_option(log_file, config_values, "log_file")

    if not repo:
        raise click.ClickException(
            "Missing required option '--repo' (or set REPO / provide it in config)."
        )

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    configuration = Configuration(
        working_dir=os.path.realpath(working_dir),
        repo_uri=repo,
        branch=branch,
        verbose=verbose,
        prefer_stable=prefer_stable,
        composer_json_dir=composer_json_dir,
        composer_bin=composer_bin,
        git_bin=git_bin,
    )

    updater = CubUpdater(configuration)
    try:
        exit_code = updater.run(package)
    except CubError as exc:
        logger.error(str(exc))
        raise SystemExit(RunResult.INIT_FAILED.exit_code) from exc

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
