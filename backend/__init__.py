"""
Issue Browser - HTTP API for browsing GitHub repositories and issues.

Provides a FastAPI backend that proxies the GitHub REST API, keeping the
optional GitHub token server-side.
"""
