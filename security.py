#!/usr/bin/env python3
"""Security validation utilities for gh-org-sync."""

import os
import re
from typing import List, Optional


class SecurityValidator:
    """Input validation for CLI values and API-supplied names, plus log redaction."""

    MAX_ORG_NAME_LENGTH = 100
    MAX_URL_LENGTH = 2048
    MAX_USERNAME_LENGTH = 100
    MAX_DIR_NAME_LENGTH = 255
    MAX_PATH_LENGTH = 4096

    # GitHub logins: alphanumerics and single hyphens
    SAFE_ORG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")
    SAFE_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9._@+-]+$")

    @staticmethod
    def _has_control_chars(value: str) -> bool:
        return "\x00" in value or any(ord(c) < 32 for c in value)

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an API base URL."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if cls._has_control_chars(url):
            raise ValueError("URL contains null bytes or control characters")

        if "://" not in url:
            raise ValueError("URL must include a scheme")

        scheme = url.split("://", 1)[0].lower()
        if allowed_schemes and scheme not in allowed_schemes:
            raise ValueError(
                f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
            )

        # Credentials belong in --username/--password, never in the URL
        if "@" in url.split("://", 1)[1].split("/", 1)[0]:
            raise ValueError("URL must not embed credentials")

        return url.rstrip("/")

    @classmethod
    def validate_org_name(cls, org: str) -> str:
        if not org or not isinstance(org, str):
            raise ValueError("Organization name must be a non-empty string")

        if len(org) > cls.MAX_ORG_NAME_LENGTH:
            raise ValueError(
                f"Organization name exceeds maximum length of {cls.MAX_ORG_NAME_LENGTH}"
            )

        if not cls.SAFE_ORG_NAME_PATTERN.match(org):
            raise ValueError("Organization name contains invalid characters")

        return org

    @classmethod
    def validate_username(cls, username: str) -> str:
        if not username or not isinstance(username, str):
            raise ValueError("Username must be a non-empty string")

        if len(username) > cls.MAX_USERNAME_LENGTH:
            raise ValueError(
                f"Username exceeds maximum length of {cls.MAX_USERNAME_LENGTH}"
            )

        if cls._has_control_chars(username):
            raise ValueError("Username contains null bytes or control characters")

        if not cls.SAFE_USERNAME_PATTERN.match(username):
            raise ValueError("Username contains invalid characters")

        return username

    @classmethod
    def validate_file_path(cls, path: str) -> str:
        """Validate the checkout root given on the command line."""
        if not path or not isinstance(path, str):
            raise ValueError("File path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"File path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("File path contains null bytes")

        return os.path.abspath(os.path.expanduser(path))

    @classmethod
    def validate_dir_name(cls, name: str) -> str:
        """Validate a checkout directory name derived from an API response.

        The name is joined onto the root path, so it must be a single path
        component that cannot point outside the root.
        """
        if not name or not isinstance(name, str):
            raise ValueError("Directory name must be a non-empty string")

        if len(name) > cls.MAX_DIR_NAME_LENGTH:
            raise ValueError(
                f"Directory name exceeds maximum length of {cls.MAX_DIR_NAME_LENGTH}"
            )

        if name in (".", ".."):
            raise ValueError(f"Directory name '{name}' is reserved")

        if "/" in name or "\\" in name or os.sep in name:
            raise ValueError("Directory name contains path separators")

        if cls._has_control_chars(name):
            raise ValueError("Directory name contains null bytes or control characters")

        return name

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        patterns = [
            (r"(https?)://[^:/@\s]+:[^@\s]+@", r"\1://[REDACTED]@"),  # URL userinfo
            (r"authorization:\s*\S+(\s+\S+)?", "Authorization: [REDACTED]"),
            (r"token[=:\s]+[^\s]+", "token=[REDACTED]"),
            (r"password[=:\s]+[^\s]+", "password=[REDACTED]"),
            (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
