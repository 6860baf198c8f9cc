"""Configuration management for Gimlet."""

from dataclasses import dataclass, field
from pathlib import Path

import platformdirs
import yaml

from gimlet.hashing import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS

GIMLET_DIR = ".gimlet"


@dataclass
class RepoConfig:
    """Per-repository configuration (.gimlet/config.yaml)."""

    gimlet_version: str = "1"
    repo_root: Path = field(default_factory=Path.cwd)

    # Object ids
    hash_algorithm: str = DEFAULT_ALGORITHM

    # Patterns skipped when `add` walks a directory
    exclude_patterns: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.hash_algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm '{self.hash_algorithm}'")

    @property
    def config_path(self) -> Path:
        """Path to the repository config file."""
        return self.repo_root / GIMLET_DIR / "config.yaml"

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "gimlet-version": self.gimlet_version,
            "core": {
                "hash-algorithm": self.hash_algorithm,
            },
            "add": {
                "exclude": self.exclude_patterns,
            },
        }

        with open(self.config_path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)

    @classmethod
    def load(cls, repo_root: Path) -> "RepoConfig":
        """Load configuration from a repository."""
        config_path = repo_root / GIMLET_DIR / "config.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"No Gimlet configuration found at {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            gimlet_version=str(data.get("gimlet-version", "1")),
            repo_root=repo_root,
            hash_algorithm=data.get("core", {}).get("hash-algorithm", DEFAULT_ALGORITHM),
        )

        if "add" in data:
            config.exclude_patterns = data["add"].get("exclude", config.exclude_patterns) or []

        return config

    @classmethod
    def load_or_default(cls, repo_root: Path) -> "RepoConfig":
        """Load configuration, falling back to defaults when missing."""
        try:
            return cls.load(repo_root)
        except FileNotFoundError:
            return cls(repo_root=repo_root)

    @classmethod
    def create_default(cls, repo_root: Path, global_config: "GlobalConfig | None" = None) -> "RepoConfig":
        """Create default configuration for a new repository."""
        if global_config is None:
            global_config = GlobalConfig.load()

        return cls(
            repo_root=repo_root,
            hash_algorithm=global_config.hash_algorithm,
            exclude_patterns=list(global_config.exclude_patterns),
        )


@dataclass
class GlobalConfig:
    """Global Gimlet configuration (per machine).

    Holds the defaults written into new repositories.
    """

    hash_algorithm: str = DEFAULT_ALGORITHM
    exclude_patterns: list[str] = field(default_factory=list)

    @property
    def config_path(self) -> Path:
        """Path to global config file."""
        config_dir = Path(platformdirs.user_config_dir("Gimlet", "Gimlet"))
        return config_dir / "config.yaml"

    def save(self) -> None:
        """Save global configuration."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "defaults": {
                "hash-algorithm": self.hash_algorithm,
                "exclude": self.exclude_patterns,
            },
        }

        with open(self.config_path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)

    @classmethod
    def load(cls) -> "GlobalConfig":
        """Load global configuration."""
        config = cls()

        if config.config_path.exists():
            with open(config.config_path) as f:
                data = yaml.safe_load(f) or {}

            defaults = data.get("defaults", {})
            config.hash_algorithm = defaults.get("hash-algorithm", config.hash_algorithm)
            config.exclude_patterns = defaults.get("exclude", config.exclude_patterns) or []

        return config
