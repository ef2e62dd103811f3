# mousequake Configuration
# All default values and constants

from dataclasses import dataclass, field, is_dataclass
from enum import IntEnum

from logging_utils import log_event


CURRENT_CONFIG_VERSION = 1

class Pattern(IntEnum):
    """Quake patterns - all traced as closed loops of relative moves"""
    LINEAR = 1      # Back and forth on the X axis
    CIRCLE = 2      # 36-step circle
    STAR = 3        # 5-pointed star (10 vertices)
    SQUARE = 4      # Axis-aligned square
    INFINITY = 5    # Figure-eight (Lissajous 1:2)

    @classmethod
    def from_name(cls, name: str) -> "Pattern":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(p.name.lower() for p in cls)
            raise ValueError(f"Unknown pattern {name!r} (expected one of: {choices})") from None

@dataclass
class MotionConfig:
    """Shape of the quake"""
    pattern: Pattern = Pattern.LINEAR
    size: float = 1.0                 # Full width / diameter in pixels

@dataclass
class TimingConfig:
    """Tick cadence"""
    interval_s: float = 10.0               # Seconds between moves
    signal_check_interval_s: float = 0.5   # Max latency to notice a termination signal

@dataclass
class Config:
    """Master configuration"""
    version: int = CURRENT_CONFIG_VERSION
    motion: MotionConfig = field(default_factory=MotionConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    dry_run: bool = False             # Log moves instead of injecting them
    log_level: str = "INFO"


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Bounds for the cancellation polling slice (seconds)
SIGNAL_CHECK_LIMITS = (0.05, 0.5)


def apply_dict_to_dataclass(target, data) -> None:
    """Recursively apply values from a dict onto a dataclass instance.
    Unknown keys are ignored; IntEnum fields are coerced from value or name."""
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if not hasattr(target, key):
            continue

        current = getattr(target, key)

        if is_dataclass(current):
            apply_dict_to_dataclass(current, value)
            continue

        if isinstance(current, IntEnum):
            enum_cls = current.__class__
            try:
                if isinstance(value, str):
                    setattr(target, key, enum_cls[value.strip().upper()])
                else:
                    setattr(target, key, enum_cls(value))
            except (KeyError, ValueError, TypeError):
                log_event("WARNING", "Config", f"Could not convert {key} to {enum_cls.__name__}, keeping default")
            continue

        setattr(target, key, value)


def _positive_or_default(value, default: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    if not value > 0 or value == float("inf"):
        return default
    return value


def parse_config_version(loaded_version) -> int:
    """Stored schema version as an int; missing or garbled counts as 0."""
    try:
        return int(loaded_version) if loaded_version is not None else 0
    except (TypeError, ValueError):
        return 0


def migrate_config(config: Config, loaded_version) -> None:
    """Upgrade older config structures to the current schema.
    Fills defaults for missing/None fields, sanitizes ranges and bumps version."""
    version = parse_config_version(loaded_version)

    defaults = Config()
    if not isinstance(config.motion.pattern, Pattern):
        config.motion.pattern = defaults.motion.pattern
    if not isinstance(config.dry_run, bool):
        if config.dry_run is not None:
            log_event("WARNING", "Config", "dry_run must be true/false, keeping default", value=config.dry_run)
        config.dry_run = defaults.dry_run

    if version < CURRENT_CONFIG_VERSION:
        log_event("INFO", "Config", "Migrating config", from_version=version, to_version=CURRENT_CONFIG_VERSION)

    config.motion.size = _positive_or_default(config.motion.size, defaults.motion.size)
    config.timing.interval_s = _positive_or_default(config.timing.interval_s, defaults.timing.interval_s)

    # Always clamp the polling slice
    check = _positive_or_default(config.timing.signal_check_interval_s,
                                 defaults.timing.signal_check_interval_s)
    low, high = SIGNAL_CHECK_LIMITS
    config.timing.signal_check_interval_s = max(low, min(high, check))

    level = str(config.log_level or defaults.log_level).upper()
    config.log_level = level if level in LOG_LEVELS else defaults.log_level

    config.version = CURRENT_CONFIG_VERSION
