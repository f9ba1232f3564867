"""Tests for saving and loading islands."""

from pathlib import Path

import numpy as np
import pytest

from islandgen.builder import Island
from islandgen.config import IslandConfig
from islandgen.persistence import load_island, save_island


class TestPersistence:
    """Tests for .npz island files."""

    def test_save_and_load(
        self, tmp_path: Path, full_island: Island, full_config: IslandConfig
    ) -> None:
        path = tmp_path / "island.npz"
        save_island(path, full_island, full_config)
        loaded, metadata = load_island(path)

        assert loaded == full_island
        assert metadata["seed"] == full_config.seed
        assert metadata["version"] == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_island(tmp_path / "missing.npz")

    def test_invalid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.npz"
        np.savez_compressed(path, floor=np.zeros(3))
        with pytest.raises(ValueError):
            load_island(path)

    def test_suffix_appended(
        self, tmp_path: Path, full_island: Island, full_config: IslandConfig
    ) -> None:
        """Paths without .npz are saved under the suffixed name."""
        written = save_island(tmp_path / "island", full_island, full_config)

        assert written == tmp_path / "island.npz"
        assert written.exists()
        assert not (tmp_path / "island").exists()
        loaded, _ = load_island(written)
        assert loaded == full_island

    def test_returns_given_npz_path(
        self, tmp_path: Path, full_island: Island, full_config: IslandConfig
    ) -> None:
        path = tmp_path / "island.npz"
        assert save_island(path, full_island, full_config) == path
