"""Derive PR branches from the local commit stack and publish them."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Set

from ..config.models import PrBranchConfig
from ..typing import Backend, Commit, CommitHash, Head, MutationResult, Path

# Get module logger
logger = logging.getLogger(__name__)

IGNORED_REFS = frozenset({"", "null", "nil"})

def find_branch_tag(message: str, prefix: str) -> str:
    """Return the value of the first ``<prefix>=<value>`` line of message, or ""."""
    marker = f"{prefix}="
    for line in message.strip().split("\n"):
        if line.startswith(marker):
            return line[len(marker):].rstrip()
    return ""

def should_ignore_ref(ref: str) -> bool:
    """Refs that are never pushed or tagged."""
    return ref.lower() in IGNORED_REFS

def make_commit(backend: Backend, sha: CommitHash, parents: List[CommitHash], prefix: str) -> Commit:
    """Build a Commit from its message and already-fetched parents."""
    message = backend.message_of(sha)
    return Commit(
        identity=sha,
        message=message,
        branch_tag=find_branch_tag(message, prefix),
        is_merge=len(parents) > 1,
    )

def enumerate_paths(backend: Backend, source: CommitHash, target: CommitHash, prefix: str) -> List[Path]:
    """Every ancestry path from source down to (not including) target.

    Depth-first over all parents, first parent first. Each path lists the
    commits nearest source first. A source equal to target gives a single
    empty path; a source that cannot reach target gives no paths.
    """
    paths: List[Path] = []
    path: Path = []
    # One iterator of pending parents per commit on the current path
    stack: List[Iterator[CommitHash]] = [iter([source])]

    while stack:
        sha = next(stack[-1], None)
        if sha is None:
            stack.pop()
            if stack:
                path.pop()
            continue

        if sha == target:
            paths.append(list(path))
            logger.debug(f"Found path of {len(path)} commits: {[c.short for c in path]}")
            continue

        parents = backend.parents_of(sha)
        path.append(make_commit(backend, sha, parents, prefix))
        stack.append(iter(parents))

    return paths

def extract_tips(path: Path) -> List[Head]:
    """Cut a path at its stoppers and name the tip of each tagged segment.

    A stopper is a commit carrying a branch tag or a merge commit. The tip of
    a segment is the first commit after the previous stopper. Merge commits
    close a segment without producing a head, even when tagged.
    """
    stoppers = [i for i, commit in enumerate(path) if commit.branch_tag or commit.is_merge]

    tips: List[Head] = []
    last = 0
    for i in stoppers:
        stopper = path[i]
        if not stopper.is_merge and stopper.branch_tag:
            tips.append(Head(tip_identity=path[last].identity, ref=stopper.branch_tag))
        last = i + 1
    return tips

class Publisher:
    """Publishes heads for one run, touching each commit at most once.

    In dry mode heads become ``<prefix>/<ref>`` tags and the created tag
    names are collected in ``active``; otherwise the branch is force-pushed.
    """

    def __init__(self, config: PrBranchConfig, backend: Backend, dry: bool = False):
        self.config = config
        self.backend = backend
        self.dry = dry
        self.published: Set[CommitHash] = set()
        self.active: List[str] = []

    @property
    def mode(self) -> str:
        return "tag" if self.dry else "push"

    def tag_name(self, head: Head) -> str:
        return f"{self.config.tool.branch_prefix}/{head.ref}"

    def publish(self, heads: Iterable[Head]) -> List[MutationResult]:
        """Tag or push every head not yet published. Failures are returned, not raised."""
        results: List[MutationResult] = []
        for head in heads:
            if should_ignore_ref(head.ref):
                logger.debug(f"Ignoring ref '{head.ref}' at {head.tip_identity[:8]}")
                continue
            if head.tip_identity in self.published:
                logger.debug(f"Already published {head.tip_identity[:8]}, skipping {head.ref}")
                continue

            if self.dry:
                tag = self.tag_name(head)
                result = self.backend.create_or_replace_tag(tag, head.tip_identity)
                if result.success:
                    self.active.append(tag)
            else:
                result = self.backend.force_push_branch(head.tip_identity, head.ref)

            if not result.success:
                logger.error(f"Failed to {self.mode} {head.ref} at {head.tip_identity[:8]}")
            self.published.add(head.tip_identity)
            results.append(result)
        return results

def reap_stale_tags(backend: Backend, prefix: str, active: Iterable[str]) -> List[str]:
    """Delete tags under ``<prefix>/`` that are not in active. Returns the deleted names."""
    keep = set(active)
    removed: List[str] = []
    for tag in backend.list_tags(f"{prefix}/"):
        if tag in keep:
            continue
        result = backend.delete_tag(tag)
        if result.success:
            removed.append(tag)
        else:
            logger.error(f"Failed to delete stale tag {tag}")
    return removed

@dataclass
class RunSummary:
    """What a run derived and did."""
    paths: int = 0
    heads: List[Head] = field(default_factory=list)
    results: List[MutationResult] = field(default_factory=list)
    active: List[str] = field(default_factory=list)
    reaped: List[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

class PrBranches:
    """PR branch derivation for the checked-out commit."""

    def __init__(self, config: PrBranchConfig, backend: Backend):
        """Initialize with config and a version control backend."""
        self.config = config
        self.backend = backend

    @property
    def prefix(self) -> str:
        return self.config.tool.branch_prefix

    def find_commit_paths(self, source: str = "HEAD", target: Optional[str] = None) -> List[Path]:
        """Paths from source to the target branch."""
        target = target or self.config.repo.target_branch
        source_sha = self.backend.resolve_commit(source)
        target_sha = self.backend.resolve_commit(target)
        logger.debug(f"Enumerating paths from {source} ({source_sha[:8]}) to {target} ({target_sha[:8]})")
        return enumerate_paths(self.backend, source_sha, target_sha, self.prefix)

    def run(self, dry: bool = False) -> RunSummary:
        """Derive heads on every path, publish them, and reap stale tags after a dry run."""
        summary = RunSummary()
        publisher = Publisher(self.config, self.backend, dry=dry)

        paths = self.find_commit_paths()
        summary.paths = len(paths)
        logger.info(f"Found {len(paths)} path(s) to {self.config.repo.target_branch}")

        for path in paths:
            heads = extract_tips(path)
            for head in heads:
                logger.info(f"  {head.tip_identity[:8]} -> {head.ref}")
            summary.heads.extend(heads)
            summary.results.extend(publisher.publish(heads))

        summary.active = list(publisher.active)
        if dry:
            summary.reaped = reap_stale_tags(self.backend, self.prefix, publisher.active)

        logger.info(
            f"{publisher.mode}: {len(summary.results)} published, {summary.failed} failed"
            + (f", {len(summary.reaped)} stale tag(s) removed" if dry else "")
        )
        return summary
