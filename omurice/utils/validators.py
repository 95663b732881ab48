"""YAML schema validation and config loading.

Provides centralized validation for the application config using pydantic:
    - Growth schema: stochastic splat growth constants
    - Render schema: ketchup splat projection and gap bridging
    - Dish schema: base-layer fill colors
    - Canvas/clock/window schemas: sizing, tick throttle, settle delay
    - Export, locale and logging sections

Every field has a default, so an empty YAML document is a valid config.
Load once at startup for fail-fast error detection with actionable messages.

Units:
    - Stroke geometry: normalized [0, 1] canvas coordinates
    - Splat sizes: dimensionless, scaled by pixel_size / radius_divisor
    - Time: milliseconds
    - Colors: "#RRGGBB" strings or [r, g, b] lists, stored as RGB 0-255 tuples

Usage:
    from omurice.utils import validators

    cfg = validators.load_app_config()                 # shipped default
    cfg = validators.load_app_config("my_omurice.yaml")
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "omurice.v1.yaml"

RGB = Tuple[int, int, int]


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


def parse_color(value: Any) -> RGB:
    """Parse "#RGB", "#RRGGBB" or a 3-sequence into an RGB 0-255 tuple.

    Examples
    --------
    >>> parse_color("#FB5A59")
    (251, 90, 89)
    >>> parse_color([222, 228, 227])
    (222, 228, 227)
    """
    if isinstance(value, str):
        h = value.strip().lstrip('#')
        if len(h) == 3:
            h = ''.join(ch * 2 for ch in h)
        if len(h) != 6:
            raise ValueError(f"Expected '#RRGGBB' color, got {value!r}")
        try:
            return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
        except ValueError as e:
            raise ValueError(f"Invalid hex color {value!r}") from e

    if isinstance(value, (list, tuple)) and len(value) == 3:
        rgb = tuple(int(c) for c in value)
        if any(c < 0 or c > 255 for c in rgb):
            raise ValueError(f"Color components must be in [0, 255], got {value!r}")
        return rgb

    raise ValueError(f"Unsupported color value: {value!r}")


class _ColorModel(BaseModel):
    """Base for sections holding color fields (hex strings accepted)."""

    @field_validator('*', mode='before')
    @classmethod
    def _coerce_colors(cls, v: Any, info) -> Any:
        field = cls.model_fields.get(info.field_name)
        if field is not None and field.annotation == RGB:
            return parse_color(v)
        return v


# ============================================================================
# GROWTH SCHEMA
# ============================================================================

class GrowthConfig(BaseModel):
    """Stochastic splat growth constants.

    The base size follows a random walk biased by ``walk_bias`` (> 0.5 means
    the sauce supply trends toward running out).
    """
    merge_threshold: float = Field(0.00125, gt=0.0, le=0.1, description="Per-step merge distance (normalized)")
    pool_divisor: float = Field(15.0, gt=0.0, description="Pooling increment = random() / pool_divisor / c")
    pool_scan_limit: int = Field(20, ge=1, le=1000, description="Splats scanned backward for pooling")
    walk_bias: float = Field(0.525, ge=0.0, le=1.0, description="Random-walk centering offset")
    walk_divisor: float = Field(10.0, gt=0.0, description="Random-walk step divisor")
    first_base_min: float = Field(0.6, gt=0.0, description="First splat base lower bound")
    first_base_span: float = Field(0.4, ge=0.0, description="First splat base random span")
    taper_threshold: float = Field(0.25, gt=0.0, description="Below this base the stream sputters")
    finish_probability: float = Field(0.05, ge=0.0, le=1.0, description="Chance a sputter ends the squeeze")
    skip_probability: float = Field(0.5, ge=0.0, le=1.0, description="Chance a sputter skips the splat")
    min_base: float = Field(0.2, gt=0.0, description="Hard floor: smaller splats are never appended")
    max_base: float = Field(1.0, gt=0.0, description="Cap applied to new splat bases")

    @model_validator(mode='after')
    def validate_ordering(self) -> 'GrowthConfig':
        if self.min_base > self.taper_threshold:
            raise ValueError(
                f"min_base ({self.min_base}) must not exceed taper_threshold ({self.taper_threshold})"
            )
        if not (self.min_base <= self.first_base_min <= self.max_base):
            raise ValueError(
                f"first_base_min ({self.first_base_min}) must lie in "
                f"[min_base={self.min_base}, max_base={self.max_base}]"
            )
        return self


# ============================================================================
# RENDER SCHEMA
# ============================================================================

class RenderConfig(_ColorModel):
    """Ketchup splat projection."""
    radius_divisor: float = Field(40.0, gt=0.0, description="Pixel radius = size × pixel_size / radius_divisor")
    flatten: float = Field(0.4, gt=0.0, le=1.0, description="Vertical/horizontal radius ratio")
    bridge_threshold: float = Field(0.004, ge=0.0, le=1.0, description="Vertical gap (fraction of pixel_size) that gets a bridge splat")
    ketchup_color: RGB = Field((251, 90, 89), description="Ketchup fill")


class DishConfig(_ColorModel):
    """Base-layer fill colors, drawn bottom to top."""
    bottom_color: RGB = (222, 228, 227)
    top_color: RGB = (234, 240, 239)
    hole_color: RGB = (232, 236, 235)
    rice_color: RGB = (246, 140, 57)
    egg_color: RGB = (239, 202, 87)


# ============================================================================
# CANVAS / CLOCK / WINDOW SCHEMAS
# ============================================================================

class CanvasConfig(_ColorModel):
    """Canvas sizing."""
    margin: float = Field(0.05, ge=0.0, lt=1.0, description="Fraction of the smaller viewport edge left empty")
    scale: int = Field(2, ge=1, le=4, description="Backing pixels per display pixel")
    background: RGB = Field((255, 255, 255), description="Clear color of the raster")


class ClockConfig(BaseModel):
    """Frame clock and deferred timers (milliseconds)."""
    fps: int = Field(60, ge=1, le=240)
    min_tick_ms: float = Field(10.0, ge=0.0, le=1000.0, description="Minimum time between processed ticks")
    settle_delay_ms: float = Field(100.0, ge=0.0, le=5000.0, description="Deferral before first full redraw")
    resize_poll_ms: float = Field(100.0, gt=0.0, le=5000.0, description="Viewport size polling period")


class WindowConfig(BaseModel):
    """Initial window layout (display pixels)."""
    width: int = Field(900, ge=200)
    height: int = Field(900, ge=200)
    header_height: int = Field(90, ge=0)
    footer_height: int = Field(80, ge=0)


# ============================================================================
# EXPORT / LOCALE / LOGGING SCHEMAS
# ============================================================================

class ExportConfig(BaseModel):
    """Snapshot export."""
    directory: str = Field("outputs/exports", description="Where omurice-*.png files are written")
    prefix: str = Field("omurice", min_length=1)


class LocaleConfig(BaseModel):
    """Localization and the persisted preference."""
    default: str = Field("en-US")
    preferences_path: str = Field("~/.omurice/preferences.yaml")

    @field_validator('default')
    @classmethod
    def validate_locale(cls, v: str) -> str:
        allowed = {'en-US', 'ja-JP'}
        if v not in allowed:
            raise ValueError(f"default locale must be one of {sorted(allowed)}, got {v}")
        return v


class LoggingConfig(BaseModel):
    """Keyword arguments forwarded to setup_logging()."""
    log_level: str = Field("INFO")
    log_file: Optional[str] = None
    json_format: bool = Field(False, alias="json")
    color: bool = True
    rotate: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got {v}")
        return v.upper()

    def setup_kwargs(self) -> Dict[str, Any]:
        """Map to setup_logging() keyword arguments."""
        return {
            'log_level': self.log_level,
            'log_file': self.log_file,
            'json': self.json_format,
            'color': self.color,
            'rotate': self.rotate,
        }


# ============================================================================
# APP SCHEMA V1
# ============================================================================

class AppConfigV1(BaseModel):
    """Complete application config (omurice.v1.yaml schema)."""
    schema_version: str = Field("omurice.v1", alias="schema")
    growth: GrowthConfig = Field(default_factory=GrowthConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    dish: DishConfig = Field(default_factory=DishConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    locale: LocaleConfig = Field(default_factory=LocaleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "omurice.v1":
            raise ValueError(f"Expected schema 'omurice.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_app_config(path: Union[str, Path, None] = None) -> AppConfigV1:
    """Load and validate the application config from YAML.

    Parameters
    ----------
    path : Union[str, Path, None]
        Path to an omurice.v1.yaml file; None loads the default shipped
        inside the package.

    Returns
    -------
    AppConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ConfigError
        If parsing or validation fails (message names the file)
    """
    import yaml

    from . import fs

    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"App config not found: {path}")

    try:
        data = fs.load_yaml(path) or {}
    except yaml.YAMLError as e:
        raise ConfigError(str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(f"App config at {path} must be a mapping, got {type(data).__name__}")

    try:
        return AppConfigV1(**data)
    except Exception as e:
        raise ConfigError(f"App config validation failed at {path}: {e}") from e
