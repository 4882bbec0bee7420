"""CLI entry point."""

import sys
import click
import logging

from ...config import Config, default_config
from ...config.config_parser import parse_config
from ...git import GitBackend, GitError, RealGit
from ...stack import PrBranches
from ...typing import AbortRun

# Get module logger
logger = logging.getLogger(__name__)

def setup_git() -> GitBackend:
    """Check we are inside a repository and build the git backend from config."""
    git_cmd = RealGit(default_config())
    try:
        git_cmd.run_cmd("rev-parse --git-dir")
    except GitError as e:
        logger.error(f"{e}")
        sys.exit(2)

    config = Config(parse_config())
    return GitBackend(config, RealGit(config))

@click.command(name="prbranch", help="Push (or with --dry, tag) one branch per PR_BRANCH= marker in the local stack")
@click.option('--dry', is_flag=True, default=False,
              help="Tags commits that will be uploaded in a non-dry run")
@click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)")
def cli(dry: bool, verbose: int) -> None:
    """Derive PR branches from the local commit stack."""
    from ... import setup_logging
    setup_logging(verbose)

    backend = setup_git()
    try:
        PrBranches(backend.config, backend).run(dry=dry)
    except AbortRun as e:
        logger.error(f"{e}")
        sys.exit(1)

def main() -> None:
    """Main entry point."""
    cli()

if __name__ == "__main__":
    main()
