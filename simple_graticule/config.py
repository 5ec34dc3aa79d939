"""
Configuration management for SimpleGraticule package.

This module provides the options recognised by the graticule overlay: which
event triggers a redraw, whether the origin label is shown, padding ratios,
debouncing and line/label styling.
"""

import json
import math
import yaml
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .constants import (
    DEFAULT_REDRAW_EVENT,
    LABEL_COLOR,
    LABEL_FONT_SIZE,
    LABEL_PADDING,
    LINE_COLOR,
    LINE_OPACITY,
    LINE_PADDING,
    LINE_WEIGHT,
    REFERENCE_SPAN_PX,
)
from .exceptions import InvalidParameterError


# Option-bag spellings accepted alongside the dataclass field names.
OPTION_ALIASES = {
    "showOriginLabel": "show_origin_label",
    "redrawEvent": "redraw_event",
    "redraw": "redraw_event",
    "hidden": "hidden",
    "linePadding": "line_padding",
    "labelPadding": "label_padding",
    "referenceSpanPx": "reference_span_px",
    "alignLatitude": "align_latitude",
    "debounceMs": "debounce_ms",
    "lineColor": "line_color",
    "lineOpacity": "line_opacity",
    "lineWeight": "line_weight",
    "labelColor": "label_color",
    "labelFontSize": "label_font_size",
}


@dataclass(frozen=True)
class LineStyle:
    """Stroke settings shared by every grid line."""

    color: str = LINE_COLOR
    opacity: float = LINE_OPACITY
    weight: float = LINE_WEIGHT
    stroke: bool = True
    interactive: bool = False


@dataclass(frozen=True)
class LabelStyle:
    """Text settings shared by every grid label."""

    color: str = LABEL_COLOR
    font_size: float = LABEL_FONT_SIZE
    interactive: bool = False


@dataclass
class GraticuleConfig:
    """Configuration for the graticule overlay.

    Attributes:
        show_origin_label: Whether to draw the "[0,0]" label at the origin.
        redraw_event: Host event (besides "viewreset") that triggers a redraw.
        hidden: Start hidden; the overlay stays attached but draws nothing.
        line_padding: Fraction of the viewport added on every side of the
            span covered by grid lines.
        label_padding: Fraction of the viewport used to inset labels from
            the visible edge (negative shrinks).
        reference_span_px: Screen distance, either side of the view centre,
            measured to pick the grid interval.
        align_latitude: Snap the first latitude line to a multiple of the
            interval, as is always done for longitude.
        debounce_ms: Collapse bursts of view-change events into one redraw
            after this many milliseconds of quiet. 0 redraws on every event.
        line_color: Grid line color (any Matplotlib color spec).
        line_opacity: Grid line opacity in [0, 1].
        line_weight: Grid line width in points.
        label_color: Label text color.
        label_font_size: Label font size in points.
    """

    show_origin_label: bool = True
    redraw_event: str = DEFAULT_REDRAW_EVENT
    hidden: bool = False
    line_padding: float = LINE_PADDING
    label_padding: float = LABEL_PADDING
    reference_span_px: int = REFERENCE_SPAN_PX
    align_latitude: bool = False
    debounce_ms: int = 0
    line_color: str = LINE_COLOR
    line_opacity: float = LINE_OPACITY
    line_weight: float = LINE_WEIGHT
    label_color: str = LABEL_COLOR
    label_font_size: float = LABEL_FONT_SIZE

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "GraticuleConfig":
        """Build a config from an option bag.

        Keys may use either the camelCase option names (``showOriginLabel``,
        ``redrawEvent``/``redraw``, ``hidden``) or the dataclass field names.

        Raises:
            InvalidParameterError: If an option name is not recognised or a
                value fails validation.
        """
        merged: Dict[str, Any] = {}
        merged.update(options or {})
        merged.update(kwargs)

        field_names = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in merged.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in field_names:
                raise InvalidParameterError(f"Unknown graticule option '{key}'")
            values[name] = value

        config = cls(**values)
        config.validate()
        return config

    @classmethod
    def load_from_file(cls, path: Path) -> "GraticuleConfig":
        """Load configuration from a YAML or JSON file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json).

        Returns:
            GraticuleConfig instance with loaded settings.

        Raises:
            InvalidParameterError: If file format is not supported.
            FileNotFoundError: If file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        if path.suffix not in ['.yaml', '.yml', '.json']:
            raise InvalidParameterError(
                f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json"
            )

        with open(path, 'r') as f:
            try:
                if path.suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise InvalidParameterError(f"Could not parse {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidParameterError(f"Configuration in {path} must be a mapping")

        return cls.from_options(data)

    def save_to_file(self, path: Path) -> None:
        """Save configuration to a YAML or JSON file.

        Args:
            path: Path where configuration should be saved.

        Raises:
            InvalidParameterError: If file format is not supported.
        """
        path = Path(path)
        if path.suffix not in ['.yaml', '.yml', '.json']:
            raise InvalidParameterError(
                f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json"
            )
        path.parent.mkdir(parents=True, exist_ok=True)

        data = asdict(self)
        with open(path, 'w') as f:
            if path.suffix == '.json':
                json.dump(data, f, indent=2)
            else:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def validate(self) -> bool:
        """Validate configuration parameters.

        Returns:
            True if configuration is valid.

        Raises:
            InvalidParameterError: If any configuration parameter is invalid.
        """
        for name in ("show_origin_label", "hidden", "align_latitude"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidParameterError(f"{name} must be a boolean")

        if not isinstance(self.redraw_event, str) or not self.redraw_event.strip():
            raise InvalidParameterError("redraw_event must be a non-empty string")

        if not _is_finite_number(self.line_padding) or self.line_padding < 0:
            raise InvalidParameterError("line_padding must be a non-negative number")

        if not _is_finite_number(self.label_padding) or not (-0.5 < self.label_padding <= 0):
            raise InvalidParameterError("label_padding must be in the range (-0.5, 0]")

        if not isinstance(self.reference_span_px, int) or self.reference_span_px <= 0:
            raise InvalidParameterError("reference_span_px must be a positive integer")

        if not isinstance(self.debounce_ms, int) or self.debounce_ms < 0:
            raise InvalidParameterError("debounce_ms must be an integer >= 0")

        if not _is_finite_number(self.line_opacity) or not (0.0 <= self.line_opacity <= 1.0):
            raise InvalidParameterError("line_opacity must be in the range [0.0, 1.0]")

        if not _is_finite_number(self.line_weight) or self.line_weight <= 0:
            raise InvalidParameterError("line_weight must be positive")

        if not _is_finite_number(self.label_font_size) or self.label_font_size <= 0:
            raise InvalidParameterError("label_font_size must be positive")

        for name in ("line_color", "label_color"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise InvalidParameterError(f"{name} must be a non-empty string")

        return True

    def line_style(self) -> LineStyle:
        return LineStyle(
            color=self.line_color,
            opacity=self.line_opacity,
            weight=self.line_weight,
        )

    def label_style(self) -> LabelStyle:
        return LabelStyle(color=self.label_color, font_size=self.label_font_size)


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def get_default_config() -> GraticuleConfig:
    """
    Get a GraticuleConfig instance with default settings.

    Returns:
        GraticuleConfig instance initialized with default values.
    """
    return GraticuleConfig()
