"""Config module."""

from typing import Dict, Any
from .models import RepoConfig, UserConfig, PrBranchConfig, ToolConfig

class Config(PrBranchConfig):
    """Config object holding repository, user and tool config.

    Built from the nested dict produced by the config parser.
    """
    def __init__(self, config: Dict[str, Dict[str, Any]]):
        """Initialize with parsed config dict."""
        repo_config = config.get('repo', {})
        user_config = config.get('user', {})
        tool_config = config.get('tool', {})

        super().__init__(
            repo=RepoConfig.model_validate(repo_config),
            user=UserConfig.model_validate(user_config),
            tool=ToolConfig.model_validate(tool_config),
        )

def default_config() -> Config:
    """Get default config without reading any file."""
    return Config({
        'repo': {
            'remote': 'origin',
            'target_branch': 'main',
        },
        'user': {},
        'tool': {
            'branch_prefix': 'PR_BRANCH',
        }
    })
