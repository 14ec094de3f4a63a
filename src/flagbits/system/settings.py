from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from flagbits.core.logging import logger, LEVELS
from flagbits.core.widths import WIDTHS

SETTINGS_FILENAME = ".flagbits_settings.json"

_TRUE = {"1","true","yes","on"}
_FALSE = {"0","false","no","off"}

@dataclass
class SettingsData:
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    strict: bool = True            # Validate single-bit values for --map sets
    full_width: bool = False       # Pad binary output to the set's width
    width: str = "uint64"          # Default width for --map sets

    def normalize(self):
        if self.log_level not in set(LEVELS):
            self.log_level = "INFO"
        if not isinstance(self.strict, bool):
            self.strict = True
        if not isinstance(self.full_width, bool):
            self.full_width = False
        if self.width not in WIDTHS:
            self.width = "uint64"

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
        logger.debug("SettingsSaved", path=str(self.path))

    def set(self, key: str, raw: str):
        """Assign a field from its string form, e.g. set('strict', 'off')."""
        names = {f.name: f for f in fields(SettingsData)}
        if key not in names:
            raise KeyError(f"Unknown setting '{key}'")
        current = getattr(self.data, key)
        if isinstance(current, bool):
            val = raw.strip().lower()
            if val in _TRUE:
                value = True
            elif val in _FALSE:
                value = False
            else:
                raise ValueError(f"Setting '{key}' expects a boolean, got '{raw}'")
        elif key == "log_level":
            value = raw.strip().upper()
        else:
            value = raw.strip().lower()
        candidate = SettingsData(**asdict(self.data))
        setattr(candidate, key, value)
        candidate.normalize()
        if getattr(candidate, key) != value:
            raise ValueError(f"Invalid value for '{key}': '{raw}'")
        self.data = candidate
