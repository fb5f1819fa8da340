from __future__ import annotations

import os
import shutil
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SDK_EXECUTABLE = "dart"


def detect_sdk_path(executable: str = SDK_EXECUTABLE) -> Optional[Path]:
    """Return the toolchain installation that ships ``executable``, if on ``PATH``.

    The executable lives in ``<sdk>/bin``, so the installation is two levels up
    from its resolved location.
    """

    found = shutil.which(executable)
    if found is None:
        return None
    return Path(os.path.realpath(found)).parent.parent


class Settings(BaseSettings):
    """Settings loaded from ``PUBGRAPH_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="PUBGRAPH_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    sdk_path: Optional[Path] = Field(default_factory=detect_sdk_path)
    package_dir: Path = Path(".")
    manifest_filename: str = "pubspec.yaml"
    location_index_filename: str = ".packages"
    lockfile_filename: str = "pubspec.lock"
    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
