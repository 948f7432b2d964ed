"""
Hackage release datasource for pvpver.

Hackage publishes, for every package, a JSON document whose keys are the
released versions and whose values are the release status:

    GET https://hackage.haskell.org/package/aeson.json
    {"2.1.2.1": "normal", "2.0.0.0": "deprecated", ...}

Only the keys matter for version lookup; "deprecated" is carried over to
Release.is_deprecated for display. Hackage does not expose publication
times here, so release_timestamp stays None and every release is stable.

Configuration (manifest):
defaults:
  registry:
    datasource: hackage
    url: "https://hackage.haskell.org"   # Optional: mirror base URL
    timeout: 30                           # Optional: seconds

Error Handling:
    - NetworkError: HTTP failures, invalid JSON, or a body that is not an object
    - Errors are chained with 'from err' for better debugging

Example:
    from pvpver.datasource.hackage import HackageDatasource

    releases = HackageDatasource().get_releases("aeson")
    print([r.version for r in releases][:3])
"""

from __future__ import annotations

from pvpver.exceptions import NetworkError
from pvpver.io import get_json
from pvpver.logging import get_global_logger

from .base import Release, register_datasource

DEFAULT_REGISTRY_URL = "https://hackage.haskell.org"


class HackageDatasource:
    """Release lookup against a Hackage server."""

    def __init__(self, registry_url: str | None = None) -> None:
        self.registry_url = (registry_url or DEFAULT_REGISTRY_URL).rstrip("/")

    def package_url(self, package_name: str) -> str:
        return f"{self.registry_url}/package/{package_name}.json"

    def changelog_url(self, package_name: str, version: str) -> str:
        return f"{self.registry_url}/package/{package_name}-{version}/changelog"

    def get_releases(self, package_name: str, *, timeout: int = 30) -> list[Release]:
        """Fetch every release of package_name from Hackage.

        Args:
            package_name: Hackage package name.
            timeout: Per-request timeout in seconds.

        Returns:
            One Release per version key, in response order.

        Raises:
            NetworkError: If the request fails or the response is not a JSON
                object keyed by version.

        """
        logger = get_global_logger()
        logger.verbose("DATASOURCE", f"Fetching releases for {package_name} from Hackage")

        data = get_json(self.package_url(package_name), timeout=timeout)
        if not isinstance(data, dict):
            raise NetworkError(
                f"unexpected Hackage response for {package_name}: "
                f"expected an object, got {type(data).__name__}"
            )

        releases = [
            Release(
                version=version,
                changelog_url=self.changelog_url(package_name, version),
                release_timestamp=None,
                is_stable=True,
                is_deprecated=status == "deprecated",
            )
            for version, status in data.items()
        ]
        logger.verbose("DATASOURCE", f"Found {len(releases)} release(s)")
        return releases


# Register this datasource when the module is imported
register_datasource("hackage", HackageDatasource)
