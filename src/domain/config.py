"""Load Hall of Fame settings from a TOML file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from domain.common import SortBy

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = ROOT_DIR / "configs" / "default.toml"
DEFAULT_DB_URL = "sqlite:///hall_of_fame.db"


@dataclass(frozen=True)
class HallOfFameConfig:
    """Runtime settings for the store, the CLI and ranking defaults."""

    file_path: Path | None
    db_url: str = DEFAULT_DB_URL
    default_sort: SortBy = SortBy.POINTS
    podium_size: int = 3
    deleted_player_label: str = "Player deleted"
    deleted_game_label: str = "Game deleted"

    def as_config_json(self) -> dict[str, Any]:
        return {
            "db_url": self.db_url,
            "default_sort": self.default_sort.value,
            "podium_size": self.podium_size,
            "deleted_player_label": self.deleted_player_label,
            "deleted_game_label": self.deleted_game_label,
        }


def load_config(file_path: Path | None = None) -> HallOfFameConfig:
    """Read and validate one config file; falls back to the bundled default."""
    target = file_path or DEFAULT_CONFIG_PATH
    if not target.exists():
        if file_path is None:
            return HallOfFameConfig(file_path=None)
        raise FileNotFoundError(f"Config file not found: {target}")
    if not target.is_file():
        raise ValueError(f"Config path is not a file: {target}")

    with target.open("rb") as file:
        raw = tomllib.load(file)
    return parse_config(raw, target)


def parse_config(raw: dict[str, Any], file_path: Path | None) -> HallOfFameConfig:
    section = raw.get("hall_of_fame", {})
    if not isinstance(section, dict):
        raise ValueError(f"{file_path}: [hall_of_fame] must be a table")

    db_url = str(section.get("db_url", DEFAULT_DB_URL)).strip()
    if not db_url:
        raise ValueError(f"{file_path}: [hall_of_fame].db_url must not be empty")

    sort_value = str(section.get("default_sort", SortBy.POINTS.value)).strip().lower()
    if sort_value not in (SortBy.POINTS.value, SortBy.PERFORMANCE.value):
        raise ValueError(
            f"{file_path}: [hall_of_fame].default_sort must be 'points' or 'performance'"
        )

    podium_size = int(section.get("podium_size", 3))
    if podium_size <= 0:
        raise ValueError(f"{file_path}: [hall_of_fame].podium_size must be > 0")

    return HallOfFameConfig(
        file_path=file_path,
        db_url=db_url,
        default_sort=SortBy(sort_value),
        podium_size=podium_size,
        deleted_player_label=str(section.get("deleted_player_label", "Player deleted")),
        deleted_game_label=str(section.get("deleted_game_label", "Game deleted")),
    )


__all__ = ["DEFAULT_CONFIG_PATH", "DEFAULT_DB_URL", "HallOfFameConfig", "load_config", "parse_config"]
