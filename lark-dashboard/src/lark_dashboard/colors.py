"""Color palettes and hex helpers for charts, metrics and text blocks."""

import re

# Dashboard blocks only accept #RRGGBB
HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
_SHORT_OR_LONG_HEX_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
_RGB_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

DEFAULT_COLORS = {
    "primary": ["#3b82f6", "#06b6d4", "#8b5cf6", "#ec4899", "#f59e0b", "#10b981"],
    "success": ["#22c55e", "#84cc16", "#10b981"],
    "warning": ["#f59e0b", "#eab308", "#fb923c"],
    "danger": ["#ef4444", "#dc2626", "#f87171"],
    "info": ["#3b82f6", "#06b6d4", "#0ea5e9"],
    "neutral": ["#64748b", "#6b7280", "#71717a"],
    "accent": ["#f472b6", "#a78bfa", "#fb7185"],
    "gradient": ["#3b82f6", "#06b6d4", "#8b5cf6", "#ec4899"],
}


def is_hex_color(color) -> bool:
    """Strict #RRGGBB check used by block validation."""
    return isinstance(color, str) and bool(HEX_COLOR_RE.match(color))


def is_valid_hex_color(color) -> bool:
    """Looser check that also accepts #RGB shorthand."""
    return isinstance(color, str) and bool(_SHORT_OR_LONG_HEX_RE.match(color))


def get_color_from_palette(palette, index: int) -> str:
    """Pick a color by index, wrapping around the palette."""
    return palette[index % len(palette)]


def generate_chart_colors(count: int, palette=None) -> list:
    palette = palette or DEFAULT_COLORS["primary"]
    return [get_color_from_palette(palette, i) for i in range(count)]


def get_conditional_color(value, thresholds) -> str:
    """Return the color of the highest threshold <= value.

    thresholds: iterable of (threshold_value, color) pairs, any order.
    Falls back to the first neutral color when value is below every threshold.
    """
    for threshold, color in sorted(thresholds, key=lambda t: t[0], reverse=True):
        if value >= threshold:
            return color
    return DEFAULT_COLORS["neutral"][0]


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(color: str):
    """Parse '#rrggbb' (or 'rrggbb') → (r, g, b), or None if malformed."""
    m = _RGB_HEX_RE.match(color)
    if not m:
        return None
    return tuple(int(part, 16) for part in m.groups())


def lighten_color(color: str, percent: float) -> str:
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    return rgb_to_hex(*(min(255, int(v + (255 - v) * (percent / 100))) for v in rgb))


def darken_color(color: str, percent: float) -> str:
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    return rgb_to_hex(*(max(0, int(v * (1 - percent / 100))) for v in rgb))
