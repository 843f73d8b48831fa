"""Container image lookup via the GitHub Packages API."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from unity_project_version import actions
from unity_project_version.config import ToolConfig
from unity_project_version.exceptions import ConfigurationError, NetworkError

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "unity-project-version"


def image_name(version: str, config: ToolConfig | None = None) -> str:
    """Image coordinate for a Unity version, e.g. ``ghcr.io/playeveryware/unity:2021.3.4f1``."""
    repository = (config or ToolConfig()).image_repository
    return f"{repository}:{version}"


def _iter_tags(records: Iterable[Any]) -> Iterable[str]:
    # Records without a dict metadata.container or a list of tags have no tags
    for record in records:
        if not isinstance(record, dict):
            continue
        metadata = record.get("metadata")
        container = metadata.get("container") if isinstance(metadata, dict) else None
        tags = container.get("tags") if isinstance(container, dict) else None
        if isinstance(tags, list):
            yield from (tag for tag in tags if isinstance(tag, str))


def fetch_package_versions(token: str, config: ToolConfig | None = None) -> list[Any]:
    """GET the package version listing (first page only).

    Raises:
        NetworkError: Transport failure, non-2xx status, or a body that is not a JSON list.
    """
    cfg = config or ToolConfig()
    req = Request(
        cfg.package_versions_url,
        headers={
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": USER_AGENT,
        },
    )
    logger.debug("GET %s", cfg.package_versions_url)
    try:
        with urlopen(req, timeout=cfg.timeout) as resp:
            data = json.loads(resp.read().decode("utf-8"))
    except HTTPError as e:
        raise NetworkError(f"Registry request failed: HTTP {e.code} {e.reason}", str(e.code)) from e
    except (URLError, OSError) as e:
        reason = getattr(e, "reason", e)
        raise NetworkError(f"Registry request failed: {reason}", "NETWORK_ERROR") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise NetworkError(f"Registry returned an invalid response: {e}", "INVALID_RESPONSE") from e

    if not isinstance(data, list):
        raise NetworkError("Registry returned an invalid response: expected a list of versions", "INVALID_RESPONSE")
    return data


def check_image(version: str, token: str | None, config: ToolConfig | None = None) -> bool:
    """Whether any package version is tagged with ``version``.

    Raises:
        ConfigurationError: No token supplied.
        NetworkError: The registry request failed.
    """
    with actions.group(f"Checking for Unity image '{version}'"):
        if not token:
            raise ConfigurationError("Specifying check-image requires image-token")

        records = fetch_package_versions(token, config)
        for tag in _iter_tags(records):
            if tag == version:
                logger.info("Found matching tag for Unity version '%s'", version)
                return True

        logger.info("No matching tag found for Unity version '%s'", version)
        return False
