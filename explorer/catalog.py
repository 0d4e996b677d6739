"""Curated open source projects shown on the repository listing."""

from datetime import date

from models.data_models import CuratedProject

SORT_OPTIONS = ("stars", "issues", "updated")

CURATED_PROJECTS = [
    CuratedProject(
        owner="facebook",
        name="react",
        description="The library for web and native user interfaces",
        language="JavaScript",
        stars=228_000,
        forks=46_700,
        open_issues=1234,
        good_first_issues=45,
        help_wanted_issues=89,
        tags=["Frontend", "Library", "Popular"],
        last_updated=date(2024, 1, 15),
    ),
    CuratedProject(
        owner="vercel",
        name="next.js",
        description="The React Framework for the Web",
        language="TypeScript",
        stars=125_000,
        forks=26_800,
        open_issues=2156,
        good_first_issues=67,
        help_wanted_issues=123,
        tags=["Framework", "Full-stack", "Popular"],
        last_updated=date(2024, 1, 14),
    ),
    CuratedProject(
        owner="tensorflow",
        name="tensorflow",
        description="An Open Source Machine Learning Framework for Everyone",
        language="Python",
        stars=185_000,
        forks=74_200,
        open_issues=3421,
        good_first_issues=156,
        help_wanted_issues=234,
        tags=["ML", "AI", "Python"],
        last_updated=date(2024, 1, 13),
    ),
    CuratedProject(
        owner="vuejs",
        name="core",
        description="The Progressive JavaScript Framework",
        language="TypeScript",
        stars=207_000,
        forks=33_700,
        open_issues=567,
        good_first_issues=23,
        help_wanted_issues=45,
        tags=["Frontend", "Framework", "Beginner-friendly"],
        last_updated=date(2024, 1, 12),
    ),
    CuratedProject(
        owner="kubernetes",
        name="kubernetes",
        description="Production-Grade Container Scheduling and Management",
        language="Go",
        stars=110_000,
        forks=39_400,
        open_issues=2789,
        good_first_issues=89,
        help_wanted_issues=167,
        tags=["DevOps", "Infrastructure", "Cloud"],
        last_updated=date(2024, 1, 11),
    ),
    CuratedProject(
        owner="microsoft",
        name="vscode",
        description="Visual Studio Code",
        language="TypeScript",
        stars=163_000,
        forks=28_900,
        open_issues=5432,
        good_first_issues=234,
        help_wanted_issues=345,
        tags=["Editor", "Tools", "Popular"],
        last_updated=date(2024, 1, 10),
    ),
]


def available_languages(projects: list[CuratedProject] = CURATED_PROJECTS) -> list[str]:
    return sorted({project.language for project in projects})


def search_projects(
    query: str = "",
    language: str = "all",
    sort_by: str = "stars",
    projects: list[CuratedProject] = CURATED_PROJECTS,
) -> list[CuratedProject]:
    """
    Filter and sort the curated projects.

    Args:
        query: Case-insensitive substring of name, description or owner
        language: Exact language, or "all"
        sort_by: "stars" (most first), "issues" (most good first issues
            first) or "updated" (most recent first)

    Raises:
        ValueError: If sort_by is not one of SORT_OPTIONS
    """
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"sort_by must be one of: {', '.join(SORT_OPTIONS)}")

    needle = query.strip().lower()
    matches = [
        project for project in projects
        if (
            needle in project.name.lower()
            or needle in project.description.lower()
            or needle in project.owner.lower()
        )
        and (language == "all" or project.language == language)
    ]

    if sort_by == "stars":
        key = lambda project: project.stars
    elif sort_by == "issues":
        key = lambda project: project.good_first_issues
    else:
        key = lambda project: project.last_updated

    return sorted(matches, key=key, reverse=True)
