"""Pydantic models for config types."""

from pydantic import BaseModel, Field

class RepoConfig(BaseModel):
    """Repository configuration."""
    remote: str = "origin"
    target_branch: str = "main"

    class Config:
        """Pydantic config."""
        extra = "allow"  # Allow extra fields for forward compatibility

class UserConfig(BaseModel):
    """User configuration."""
    log_git_commands: bool = False

    class Config:
        """Pydantic config."""
        extra = "allow"

class ToolConfig(BaseModel):
    """Tool configuration."""
    # Marker key in commit messages and namespace for dry-run tags
    branch_prefix: str = "PR_BRANCH"

    class Config:
        """Pydantic config."""
        extra = "allow"

class PrBranchConfig(BaseModel):
    """Full prbranch configuration."""
    repo: RepoConfig = Field(default_factory=RepoConfig)
    user: UserConfig = Field(default_factory=UserConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)

    class Config:
        """Pydantic config."""
        extra = "allow"
