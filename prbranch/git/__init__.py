"""Git interfaces and implementation."""

import os
import shlex
import logging
from typing import List, Optional
import git
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from ..typing import AbortRun, CommitHash, GitInterface, MutationResult
from ..config.models import PrBranchConfig

# Get module logger
logger = logging.getLogger(__name__)

class GitError(Exception):
    """A single git invocation failed."""

class RealGit:
    """Real Git implementation."""
    def __init__(self, config: PrBranchConfig, directory: Optional[str] = None):
        """Initialize with config."""
        self.config: PrBranchConfig = config
        self.directory = directory

    def _repo(self) -> git.Repo:
        return git.Repo(self.directory or os.getcwd(), search_parent_directories=True)

    def run_cmd(self, command: str, output: Optional[str] = None) -> str:
        """Run git command."""
        cmd_str = command.strip()
        logger.debug(f"> git {cmd_str}")
        try:
            git_cmd = self._repo().git
            cmd_parts = shlex.split(cmd_str)
            method = getattr(git_cmd, cmd_parts[0].replace('-', '_'))
            result = method(*cmd_parts[1:])
            return result if isinstance(result, str) else str(result)
        except GitCommandError as e:
            raise GitError(f"Git command failed: {e}")
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise GitError("Not in a git repository")

    def must_git(self, command: str, output: Optional[str] = None) -> str:
        """Run git command, failing on error."""
        return self.run_cmd(command, output)

class GitBackend:
    """Commit history queries and ref mutations on top of a git command runner.

    Reads raise AbortRun when git fails. Mutations never raise; they
    report a MutationResult instead.
    """

    def __init__(self, config: PrBranchConfig, git_cmd: GitInterface):
        self.config = config
        self.git_cmd = git_cmd

    def _read(self, command: str, what: str) -> str:
        if self.config.user.log_git_commands:
            logger.info(f"> git {command}")
        try:
            return self.git_cmd.must_git(command)
        except GitError as e:
            raise AbortRun(f"Error running get {what}: {e}")

    def _mutate(self, command: str) -> MutationResult:
        logger.info(f"> git {command}")
        try:
            out = self.git_cmd.must_git(command)
        except GitError as e:
            logger.error(f"{e}")
            return MutationResult(False, str(e))
        return MutationResult(True, out.strip())

    def resolve_commit(self, ref: str) -> CommitHash:
        """Resolve a ref to a full commit hash."""
        return CommitHash(self._read(f"show --no-patch --format=%H {shlex.quote(ref)}", "sha").strip())

    def parents_of(self, commit: CommitHash) -> List[CommitHash]:
        """Parents of a commit, first parent first. Empty for a root commit."""
        out = self._read(f"show --no-patch --format=%P {commit}", "parents")
        return [CommitHash(p) for p in out.split()]

    def message_of(self, commit: CommitHash) -> str:
        """Full commit message."""
        return self._read(f"show --no-patch --format=%B {commit}", "message")

    def list_tags(self, prefix: str) -> List[str]:
        """Tags whose name starts with prefix."""
        out = self._read("tag --list", "tags")
        return [t for t in (line.strip() for line in out.splitlines()) if t and t.startswith(prefix)]

    def create_or_replace_tag(self, name: str, commit: CommitHash) -> MutationResult:
        return self._mutate(f"tag --force {shlex.quote(name)} {commit}")

    def delete_tag(self, name: str) -> MutationResult:
        return self._mutate(f"tag --delete {shlex.quote(name)}")

    def force_push_branch(self, commit: CommitHash, branch: str) -> MutationResult:
        remote = self.config.repo.remote
        return self._mutate(f"push --force {remote} {shlex.quote(f'{commit}:refs/heads/{branch}')}")
