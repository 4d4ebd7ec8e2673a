"""Post a status to a Mastodon instance from a CI/CD pipeline."""

import platform
from dataclasses import dataclass, field
from datetime import UTC, datetime
from importlib.metadata import PackageNotFoundError, version

from mastodon_action.env_utils import get_first_env

DISTRIBUTION_NAME = "mastodon-action"


@dataclass(frozen=True)
class BuildInfo:
    """Build metadata, populated once at startup."""

    version: str
    revision: str
    python_version: str = field(default_factory=platform.python_version)
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_environment(cls) -> "BuildInfo":
        try:
            package_version = version(DISTRIBUTION_NAME)
        except PackageNotFoundError:
            package_version = "dev"
        revision = get_first_env("MASTODON_ACTION_REVISION", "GITHUB_SHA", default="unknown")
        return cls(version=package_version, revision=revision)


BUILD_INFO = BuildInfo.from_environment()
__version__ = BUILD_INFO.version

__all__ = ["BUILD_INFO", "BuildInfo", "__version__"]
