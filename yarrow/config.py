"""
Yarrow Engine Configuration

Tunables for the reseed policy, digest selection and the optional reseed
journal. Values come from defaults, environment variables or a YAML file.

Environment Variables:
    YARROW_RESEED_INTERVAL: Minimum seconds between seed rotations (default: 60)
    YARROW_DIGEST: Registered digest name (default: "sha3_512")
    YARROW_JOURNAL_PATH: JSONL file receiving reseed records (default: unset)
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .digest import DEFAULT_DIGEST, available_digests

DEFAULT_RESEED_INTERVAL = 60


@dataclass(frozen=True)
class YarrowConfig:
    """Configuration for a Yarrow generator."""

    # Seed rotation fires only when strictly more than this many seconds
    # have elapsed since the previous rotation.
    reseed_interval: int = DEFAULT_RESEED_INTERVAL
    digest: str = DEFAULT_DIGEST
    journal_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_env(cls) -> "YarrowConfig":
        """Load configuration from environment variables."""
        journal_path = os.getenv("YARROW_JOURNAL_PATH") or None
        return cls(
            reseed_interval=int(os.getenv("YARROW_RESEED_INTERVAL", str(DEFAULT_RESEED_INTERVAL))),
            digest=os.getenv("YARROW_DIGEST", DEFAULT_DIGEST),
            journal_path=journal_path,
        )

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "YarrowConfig":
        """
        Load configuration from a YAML file.

        The mapping may sit at the top level or under a ``yarrow:`` key.

        Args:
            config_path: Path to the YAML file.

        Returns:
            YarrowConfig built from the file, defaults filling absent keys.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the document is not a mapping or has unknown keys.
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        if "yarrow" in data:
            data = data["yarrow"] or {}
            if not isinstance(data, dict):
                raise ValueError(f"'yarrow' section in {path} must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

        if "reseed_interval" in data:
            data["reseed_interval"] = int(data["reseed_interval"])
        return cls(**data)

    def validate(self) -> None:
        """Validate configuration parameters."""
        errors = []

        if self.reseed_interval < 0:
            errors.append(f"reseed_interval must be >=0, got {self.reseed_interval}")

        if self.digest not in available_digests():
            errors.append(
                f"digest must be one of {available_digests()}, got '{self.digest}'"
            )

        if errors:
            raise ValueError("Invalid yarrow configuration:\n" + "\n".join(f"  - {e}" for e in errors))
