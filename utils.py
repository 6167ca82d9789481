#!/usr/bin/env python3
"""Utility functions for gh-org-sync."""

from urllib.parse import quote, urlencode

from config import LISTING_PAGE_SIZE
from errors import MalformedRepositoryError
from security import SecurityValidator

GIT_SUFFIX = ".git"


def build_listing_url(api_url: str, org: str, per_page: int = LISTING_PAGE_SIZE) -> str:
    """Return the first-page URL of the organization repository listing.

    Example: ('https://api.github.com', 'acme') ->
    'https://api.github.com/orgs/acme/repos?per_page=200&type=all'
    """
    query = urlencode({"per_page": per_page, "type": "all"})
    return f"{api_url.rstrip('/')}/orgs/{quote(org, safe='')}/repos?{query}"


def repo_dir_name(clone_url: str) -> str:
    """Derive the checkout directory name from a clone URL.

    Takes the text after the final '/' and drops the '.git' suffix:
    'https://host/org/my-repo.git' -> 'my-repo'.
    """
    if not clone_url.endswith(GIT_SUFFIX):
        raise MalformedRepositoryError(f"missing '{GIT_SUFFIX}' from URL: {clone_url}")

    slash = clone_url.rfind("/")
    if slash == -1:
        raise MalformedRepositoryError(f"invalid URL format: {clone_url}")

    name = clone_url[slash + 1 : -len(GIT_SUFFIX)]
    try:
        return SecurityValidator.validate_dir_name(name)
    except ValueError as e:
        raise MalformedRepositoryError(f"unusable repository name in {clone_url}: {e}") from e
