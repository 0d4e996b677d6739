"""Tests for the curated project listing."""

import pytest

from explorer.catalog import CURATED_PROJECTS, available_languages, search_projects


def names(projects):
    return [project.full_name for project in projects]


def test_default_sorted_by_stars():
    stars = [project.stars for project in search_projects()]
    assert stars == sorted(stars, reverse=True)
    assert len(stars) == len(CURATED_PROJECTS)


def test_search_matches_name_description_or_owner():
    assert names(search_projects("REACT")) == ["facebook/react", "vercel/next.js"]
    assert names(search_projects("kubernetes")) == ["kubernetes/kubernetes"]
    assert names(search_projects("machine learning")) == ["tensorflow/tensorflow"]


def test_language_filter():
    projects = search_projects(language="TypeScript")
    assert {project.language for project in projects} == {"TypeScript"}
    assert search_projects(language="Rust") == []


def test_sort_by_good_first_issues():
    projects = search_projects(sort_by="issues")
    assert projects[0].full_name == "microsoft/vscode"


def test_sort_by_last_updated():
    projects = search_projects(sort_by="updated")
    assert projects[0].full_name == "facebook/react"
    assert projects[-1].full_name == "microsoft/vscode"


def test_unknown_sort_rejected():
    with pytest.raises(ValueError):
        search_projects(sort_by="forks")


def test_available_languages():
    assert available_languages() == ["Go", "JavaScript", "Python", "TypeScript"]
