"""Data models for the issue browser."""

from models.config_models import Config, CredentialsConfig
from models.data_models import (
    Comment,
    CuratedProject,
    FilterState,
    GitHubUser,
    Issue,
    IssueDetail,
    IssuePage,
    Label,
    Pagination,
    Repository,
    SortState,
)

__all__ = [
    "Config",
    "CredentialsConfig",
    "Comment",
    "CuratedProject",
    "FilterState",
    "GitHubUser",
    "Issue",
    "IssueDetail",
    "IssuePage",
    "Label",
    "Pagination",
    "Repository",
    "SortState",
]
