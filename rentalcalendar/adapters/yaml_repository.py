"""
Configuration repository storing one YAML file per asset.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import yaml

from ..domain.asset import AssetConfiguration
from ..domain.exceptions import ConfigurationStoreError

logger = logging.getLogger(__name__)


class YamlConfigurationRepository:
    """
    Persists ``AssetConfiguration`` values as ``<data_dir>/<asset_id>.yaml``.

    Saves are last-write-wins: the incoming configuration always replaces the
    stored one and gets ``version = max(stored, incoming) + 1``. Overwriting a
    stored version newer than the one the writer loaded is logged.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir

    def _path_for(self, asset_id: str) -> Path:
        if not asset_id or "/" in asset_id or "\\" in asset_id or asset_id.startswith("."):
            raise ConfigurationStoreError(f"Invalid asset id: {asset_id!r}")
        return self.data_dir / f"{asset_id}.yaml"

    def _read(self, asset_id: str) -> Optional[AssetConfiguration]:
        path = self._path_for(asset_id)

        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ConfigurationStoreError(f"Could not read {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigurationStoreError(f"Invalid YAML in {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationStoreError(f"{path} must contain a mapping at the root level.")

        data.setdefault("asset_id", asset_id)

        try:
            return AssetConfiguration.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationStoreError(f"Invalid asset configuration in {path}: {exc}") from exc

    async def load(self, asset_id: str) -> AssetConfiguration:
        """Load an asset's configuration; unknown assets get an empty one."""
        configuration = self._read(asset_id)

        if configuration is None:
            logger.debug("No stored configuration for asset %s", asset_id)
            return AssetConfiguration(asset_id=asset_id)

        return configuration

    async def save(self, configuration: AssetConfiguration) -> AssetConfiguration:
        """
        Store a configuration and return it with its new version stamp.

        Raises:
            ConfigurationStoreError: If the file cannot be written
        """
        stored = self._read(configuration.asset_id)
        stored_version = stored.version if stored else 0

        if stored_version > configuration.version:
            logger.warning(
                "Overwriting asset %s version %d with changes based on version %d",
                configuration.asset_id,
                stored_version,
                configuration.version,
            )

        saved = replace(configuration, version=max(stored_version, configuration.version) + 1)
        path = self._path_for(saved.asset_id)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(saved.to_dict(), f, sort_keys=False, allow_unicode=True)
        except OSError as exc:
            raise ConfigurationStoreError(f"Could not write {path}: {exc}") from exc

        logger.debug("Saved asset %s at version %d", saved.asset_id, saved.version)
        return saved
