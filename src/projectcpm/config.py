import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = 'PROJECTCPM_'


@dataclass(frozen=True)
class Settings:
    # a gap of up to this many days between linked tasks still counts as "no float"
    slack_threshold_days: int = 1
    day_width: float = 40.0
    min_day_width: float = 0.5
    max_day_width: float = 200.0
    zoom_factor: float = 1.2
    lead_margin_days: int = 5
    min_trail_margin_days: int = 15
    trail_margin_px: float = 400.0
    max_timeline_days: int = 40000

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, str]]) -> 'Settings':
        """Build settings from upper-case string parameters, e.g. ``{'SLACK_THRESHOLD_DAYS': '0'}``."""
        if not params: return cls()
        overrides = {}
        for f in fields(cls):
            raw = params.get(f.name.upper())
            if raw is None or str(raw).strip() == '':
                continue
            try:
                overrides[f.name] = _coerce(f.name, raw)
            except ValueError as exc:
                raise ConfigError(f"Invalid value for {f.name.upper()}: {raw!r}") from exc
        settings = replace(cls(), **overrides)
        settings.validate()
        return settings

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        environ = os.environ if environ is None else environ
        params = {k[len(ENV_PREFIX):]: v for k, v in environ.items() if k.startswith(ENV_PREFIX)}
        return cls.from_params(params)

    def validate(self):
        if self.slack_threshold_days < 0:
            raise ConfigError('SLACK_THRESHOLD_DAYS must be >= 0')
        if not 0 < self.min_day_width <= self.max_day_width:
            raise ConfigError('MIN_DAY_WIDTH must be positive and not above MAX_DAY_WIDTH')
        if self.day_width <= 0:
            raise ConfigError('DAY_WIDTH must be positive')
        if self.zoom_factor <= 1:
            raise ConfigError('ZOOM_FACTOR must be greater than 1')


_INT_FIELDS = {'slack_threshold_days', 'lead_margin_days', 'min_trail_margin_days', 'max_timeline_days'}


def _coerce(name, raw):
    text = str(raw).strip()
    return int(text) if name in _INT_FIELDS else float(text)


DEFAULT_SETTINGS = Settings()
