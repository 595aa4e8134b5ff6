# picker_core/config.py
from __future__ import annotations
import logging
import os
import textwrap
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_ROLE_QUOTAS, FIXED_ROLES

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# ===== App defaults =====
DEFAULT_CONFIG = {
    "role_quotas": dict(DEFAULT_ROLE_QUOTAS),
    "random_seed": None,             # None -> fresh OS entropy each session
    "store_path": ".data/chaos_picker.json",
    "log_level": "INFO",
}

DEFAULT_CONFIG_YAML = textwrap.dedent("""\
# Starters per team for each fixed role. Flex players fill either.
role_quotas:
  Guard: 3
  Forward: 2

# Set an integer to make every draw reproducible.
random_seed: null

store_path: .data/chaos_picker.json
log_level: INFO
""")


class AppConfig(BaseModel):
    role_quotas: Dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_ROLE_QUOTAS))
    random_seed: Optional[int] = None
    store_path: str = ".data/chaos_picker.json"
    log_level: str = "INFO"

    @field_validator("role_quotas")
    @classmethod
    def _fixed_roles_only(cls, v):
        for role, n in v.items():
            if role not in FIXED_ROLES:
                raise ValueError(f"role_quotas only accepts {FIXED_ROLES}, got {role!r}")
            if n < 0:
                raise ValueError(f"quota for {role} must be >= 0")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v):
        v = str(v).upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return v


def load_app_config(path: Optional[str] = None) -> AppConfig:
    """Read YAML config; a missing file (or no path) yields the defaults."""
    if not path or not os.path.exists(path):
        return AppConfig(**DEFAULT_CONFIG)
    with open(path, "r", encoding="utf-8") as f:
        obj = yaml.safe_load(f) or {}
    if not isinstance(obj, dict):
        raise ValueError(f"Config {path} must be a mapping.")
    merged = {**DEFAULT_CONFIG, **obj}
    return AppConfig(**merged)


def write_default_config(path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    if not os.path.exists(path):
        with open(path, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG_YAML)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
