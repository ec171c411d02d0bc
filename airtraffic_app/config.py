"""
Application configuration.

Settings come from a JSON file (``config/airtraffic.json`` next to this
module unless another path is given) and can be overridden from the
environment:

    AIRTRAFFIC_MAP        path to the world map image
    AIRTRAFFIC_FRAME_MS   animation tick in milliseconds
    AIRTRAFFIC_KIOSK      any non-empty value → full screen
"""
from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

from airtraffic.render.scheduler import INFINITE, IntervalPolicy

log = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "config"
DEFAULT_CONFIG = CONFIG_DIR / "airtraffic.json"

# ── Platform detection ─────────────────────────────────────────────────
_IS_PI = (
    platform.system() == "Linux"
    and platform.machine().startswith(("aarch64", "arm"))
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _require_number(name: str, value) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")


def _require_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass
class AppConfig:
    map_path: Optional[str] = None
    label_text: str = "AirTraffic Live"
    label_height: float = 18.0
    loop_ms: int = 3000
    frame_interval_ms: int = 33 if _IS_PI else 16
    sites: List[str] = field(default_factory=lambda: ["gauges-main"])
    demo_rate_hz: float = 4.0
    demo_max_hits: int = 200
    log_level: str = "INFO"
    kiosk: bool = False

    def validate(self) -> None:
        for name in ("label_height", "demo_rate_hz"):
            _require_number(name, getattr(self, name))
        for name in ("loop_ms", "frame_interval_ms", "demo_max_hits"):
            _require_int(name, getattr(self, name))
        for name in ("label_text", "log_level"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string, got {getattr(self, name)!r}")
        if self.map_path is not None and not isinstance(self.map_path, str):
            raise ValueError(f"map_path must be a string or null, got {self.map_path!r}")
        if not isinstance(self.sites, list) or not all(isinstance(s, str) for s in self.sites):
            raise ValueError(f"sites must be a list of strings, got {self.sites!r}")

        if self.label_height < 0:
            raise ValueError(f"label_height must be >= 0, got {self.label_height}")
        if self.loop_ms <= 0:
            raise ValueError(f"loop_ms must be positive, got {self.loop_ms}")
        if self.frame_interval_ms <= 0:
            raise ValueError(f"frame_interval_ms must be positive, got {self.frame_interval_ms}")
        if self.demo_rate_hz <= 0:
            raise ValueError(f"demo_rate_hz must be positive, got {self.demo_rate_hz}")
        if self.demo_max_hits <= 0:
            raise ValueError(f"demo_max_hits must be positive, got {self.demo_max_hits}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log_level '{self.log_level}'")

    def interval_policy(self) -> IntervalPolicy:
        return IntervalPolicy(
            duration_ms=self.loop_ms,
            repeat_count=INFINITE,
            frame_interval_ms=self.frame_interval_ms,
        )


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Read the configuration, apply environment overrides and validate.

    A missing default file yields the built-in defaults; a missing explicit
    *path* raises ``FileNotFoundError``.
    """
    cfg_path = Path(path) if path else DEFAULT_CONFIG
    data: dict = {}
    if cfg_path.exists():
        with cfg_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    elif path:
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    known = {f.name for f in fields(AppConfig)}
    for key in sorted(set(data) - known):
        log.warning("Ignoring unknown config key '%s' in %s", key, cfg_path.name)
    cfg = AppConfig(**{k: v for k, v in data.items() if k in known})
    # File values are checked before the path handling below uses them
    cfg.validate()

    # Relative map paths are relative to the config file
    if cfg.map_path and not Path(cfg.map_path).is_absolute():
        cfg.map_path = str(cfg_path.parent / cfg.map_path)

    env_map = os.environ.get("AIRTRAFFIC_MAP")
    if env_map:
        cfg.map_path = env_map
    env_frame = os.environ.get("AIRTRAFFIC_FRAME_MS")
    if env_frame:
        try:
            cfg.frame_interval_ms = int(env_frame)
        except ValueError:
            raise ValueError(f"AIRTRAFFIC_FRAME_MS must be an integer, got '{env_frame}'")
    if os.environ.get("AIRTRAFFIC_KIOSK"):
        cfg.kiosk = True

    cfg.validate()
    return cfg
