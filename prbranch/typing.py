"""Common types used across the codebase."""

from dataclasses import dataclass
from typing import List, NewType, Optional, Protocol

CommitHash = NewType('CommitHash', str)

class AbortRun(Exception):
    """Raised when history cannot be read and the run must stop."""

@dataclass(frozen=True)
class Commit:
    """A commit on a path between HEAD and the target branch."""
    identity: CommitHash
    message: str = ""
    branch_tag: str = ""
    is_merge: bool = False

    @property
    def short(self) -> str:
        return self.identity[:8]

@dataclass(frozen=True)
class Head:
    """A branch name resolved to the commit it should point at."""
    tip_identity: CommitHash
    ref: str

@dataclass(frozen=True)
class MutationResult:
    """Outcome of one push, tag or tag deletion."""
    success: bool
    message: str = ""

Path = List[Commit]

class GitInterface(Protocol):
    """Protocol for running git commands."""
    def run_cmd(self, command: str, output: Optional[str] = None) -> str: ...
    def must_git(self, command: str, output: Optional[str] = None) -> str: ...

class Backend(Protocol):
    """What the branch derivation needs from version control."""
    def resolve_commit(self, ref: str) -> CommitHash: ...
    def parents_of(self, commit: CommitHash) -> List[CommitHash]: ...
    def message_of(self, commit: CommitHash) -> str: ...
    def list_tags(self, prefix: str) -> List[str]: ...
    def create_or_replace_tag(self, name: str, commit: CommitHash) -> MutationResult: ...
    def delete_tag(self, name: str) -> MutationResult: ...
    def force_push_branch(self, commit: CommitHash, branch: str) -> MutationResult: ...
