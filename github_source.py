#!/usr/bin/env python3
"""GitHub listing API wrapper for discovering repositories in an organization."""

from __future__ import annotations

import json
import sys
from typing import List, Optional, Set

import requests

from errors import GitHubAPIError, GitHubAuthError, PaginationCycleError
from logging_utils import Logger
from models import Page, RepositoryDescriptor
from utils import build_listing_url


class GitHubSource:
    """Walks the paginated organization repository listing."""

    def __init__(
        self,
        api_url: str,
        username: str,
        password: str,
        *,
        debug: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url
        self.debug = debug
        self.session = session or requests.Session()
        self.session.auth = (username, password)
        self.session.headers.update({"Accept": "application/vnd.github+json"})

    def fetch_page(self, url: str) -> Page:
        """Fetch one listing page and the cursor to the next one."""
        try:
            response = self.session.get(url)
        except requests.RequestException as e:
            raise GitHubAPIError(f"failed to contact github api: {e}") from e

        if response.status_code == 401:
            raise GitHubAuthError(
                f"unauthorized ({response.status_code} {response.reason}): "
                "check --username and --password"
            )
        if response.status_code != 200:
            raise GitHubAPIError(
                f"listing request failed: {response.status_code} {response.reason}"
            )

        next_url = self._next_page_url(response)

        if self.debug:
            self._dump_body(response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise GitHubAPIError(f"unexpected response body from {url}: {e}") from e

        if not isinstance(payload, list):
            raise GitHubAPIError(
                f"unexpected response body from {url}: expected a JSON array, "
                f"got {type(payload).__name__}"
            )

        return Page(
            next_url=next_url,
            repositories=[RepositoryDescriptor.from_api(item) for item in payload],
        )

    def list_repositories(self, org: str) -> List[RepositoryDescriptor]:
        """Follow rel="next" cursors from the first page until none remain.

        Any failing page aborts the listing; no partial result is returned.
        """
        Logger.info(f"discovering repositories under: {org}")
        repositories: List[RepositoryDescriptor] = []
        visited: Set[str] = set()
        url: Optional[str] = build_listing_url(self.api_url, org)
        page_number = 0

        while url:
            if url in visited:
                raise PaginationCycleError(f"pagination cursor repeated: {url}")
            visited.add(url)

            page = self.fetch_page(url)
            page_number += 1
            repositories.extend(page.repositories)
            Logger.debug(
                f"page {page_number}: {len(page.repositories)} repositories"
            )
            url = page.next_url

        Logger.info(f"found {len(repositories)} repositories to process")
        return repositories

    @staticmethod
    def _next_page_url(response: requests.Response) -> Optional[str]:
        link_header = response.headers.get("Link")
        if not link_header:
            return None
        for link in requests.utils.parse_header_links(link_header):
            if "next" in link.get("rel", "").split() and link.get("url"):
                return link["url"]
        return None

    @staticmethod
    def _dump_body(body: str) -> None:
        try:
            pretty = json.dumps(json.loads(body), indent="\t")
        except ValueError:
            pretty = body
        sys.stdout.write(pretty + "\n")
        sys.stdout.flush()
