"""Readers for the two file-based configuration sources."""

from pathlib import Path
from typing import Any

import yaml


def global_config_path() -> Path:
    """Return the path of the global ~/.siteaudit/config.yml file."""
    return Path.home() / ".siteaudit" / "config.yml"


def load_env_file(env_path: Path) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines; comments, blank lines and ``export`` prefixes are allowed."""
    if not env_path.is_file():
        return {}
    values: dict[str, str] = {}
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, value = line.partition("=")
        if line.startswith("#") or not sep or not key.strip():
            continue
        values[key.strip()] = value.strip().strip("\"'")
    return values


def load_global_config() -> dict[str, Any]:
    """Load ~/.siteaudit/config.yml; anything but a mapping counts as empty."""
    path = global_config_path()
    if not path.is_file():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def load_local_config(work_dir: Path | None = None) -> dict[str, str]:
    """Load the .env file from the working directory."""
    return load_env_file((work_dir or Path.cwd()) / ".env")
