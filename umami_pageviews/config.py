"""Configuration management for umami-pageviews.

Loads settings from environment variables or a YAML file, falling back to
the defaults of the blog this script was written for. Config objects are
frozen: build one at startup and pass it down explicitly.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class UmamiConfig:
    """Umami share-link configuration."""

    enable: bool = True
    base_url: str = "https://u.2x.nz"
    share_id: str = "CdkXbGgZr6ECKOyK"  # allow-secret
    timezone: str = "Asia/Shanghai"

    @property
    def configured(self) -> bool:
        return bool(self.enable and self.base_url and self.share_id)

    @property
    def api_url(self) -> str:
        return self.base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> "UmamiConfig":
        defaults = cls()
        return cls(
            enable=_env_flag("UMAMI_ENABLE", defaults.enable),
            base_url=os.environ.get("UMAMI_BASE_URL", defaults.base_url),
            share_id=os.environ.get("UMAMI_SHARE_ID", defaults.share_id),  # allow-secret
            timezone=os.environ.get("UMAMI_TIMEZONE", defaults.timezone),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "UmamiConfig":
        """Load settings from a YAML file.

        Keys may sit at the top level or under an ``umami`` section, in
        snake_case or in the camelCase used by the site's own config.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Umami config {path} must be a YAML mapping")
        if isinstance(data.get("umami"), dict):
            data = data["umami"]

        defaults = cls()
        return cls(
            enable=bool(data.get("enable", defaults.enable)),
            base_url=str(data.get("base_url", data.get("baseUrl", defaults.base_url))),
            share_id=str(data.get("share_id", data.get("shareId", defaults.share_id))),
            timezone=str(data.get("timezone", defaults.timezone)),
        )


@dataclass(frozen=True)
class SyncConfig:
    """Top-level configuration for one pageviews sync run."""

    umami: UmamiConfig = field(default_factory=UmamiConfig)
    posts_dir: str = "src/content/posts"
    output_file: str = "pageviews.json"
    extensions: tuple[str, ...] = (".md",)
    batch_size: int = 20
    pause_seconds: float = 0.5
    timeout: float = 30

    @classmethod
    def from_env(cls) -> "SyncConfig":
        return cls(
            umami=UmamiConfig.from_env(),
            posts_dir=os.environ.get("PAGEVIEWS_POSTS_DIR", "src/content/posts"),
            output_file=os.environ.get("PAGEVIEWS_OUTPUT", "pageviews.json"),
        )
