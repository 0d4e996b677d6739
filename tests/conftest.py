"""Shared pytest fixtures and configuration."""

from unittest.mock import Mock

import pytest

from models.data_models import Issue


@pytest.fixture
def test_env(monkeypatch):
    """
    Set valid test environment variables so config can be loaded
    during tests without requiring real credentials.
    """
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_token_1234567890")
    monkeypatch.setenv("GITHUB_API_URL", "https://api.github.com")
    monkeypatch.setenv("ISSUES_PER_PAGE", "50")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    return {
        "github_token": "ghp_test_token_1234567890",
        "issues_per_page": 50,
        "log_level": "DEBUG",
    }


@pytest.fixture
def invalid_env(monkeypatch):
    """
    Set up invalid environment variables for testing validation.
    """
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_your_token_here")
    monkeypatch.setenv("ISSUES_PER_PAGE", "500")


def issue_data(number=1, **overrides):
    """Build a raw issue dict shaped like the GitHub REST API response."""
    data = {
        "id": 1000 + number,
        "number": number,
        "title": f"Issue {number}",
        "body": "Something is broken",
        "state": "open",
        "labels": [],
        "assignee": None,
        "assignees": [],
        "user": {"login": "octocat", "avatar_url": "https://avatars.example/octocat"},
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
        "closed_at": None,
        "comments": 0,
        "html_url": f"https://github.com/owner/repo/issues/{number}",
    }
    data.update(overrides)
    return data


def label_data(name, color="ededed", label_id=None):
    return {"id": label_id or abs(hash(name)) % 100000, "name": name, "color": color}


def make_issue(number=1, **overrides) -> Issue:
    return Issue.model_validate(issue_data(number, **overrides))


def mock_response(status_code=200, json_data=None, links=None, reason="OK", headers=None):
    """Mock ``requests.Response`` with the attributes the fetcher reads."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.text = reason
    response.headers = headers or {"X-RateLimit-Remaining": "4999", "X-RateLimit-Limit": "5000"}
    response.links = links or {}
    response.json.return_value = [] if json_data is None else json_data
    return response


def link(url_page, rel, per_page=30):
    """One entry of ``response.links`` for the issues endpoint."""
    return {
        "url": f"https://api.github.com/repositories/1/issues?state=all&per_page={per_page}&page={url_page}",
        "rel": rel,
    }
