# mdbook_tailwind/markdown/utilities.py
"""
Tailwind utility classes resolved to inline CSS.

mdBook pages do not load Tailwind's stylesheet, so a known utility such as
``text-red-500`` is turned into the declaration it stands for
(``color:#ef4444;``) and written into a ``style`` attribute instead.

Covered utilities:
- colours: text-*, bg-*, border-* with the default palette (50-900),
  plus white, black, transparent, current, inherit
- typography: text-xs..text-9xl, font-thin..font-black, italic,
  not-italic, underline, line-through, no-underline, uppercase,
  lowercase, capitalize, normal-case, text-left/center/right/justify,
  leading-*, tracking-*
- box model: p/px/py/pt/pr/pb/pl-*, m/mx/my/mt/mr/mb/ml-* (incl. auto and
  negative margins), w-*, border, border-N, rounded*
- misc: opacity-*, block, inline-block, inline, flex, grid, hidden

Anything else raises ``UtilityNotFound`` and is treated as an ordinary CSS
class by the caller.
"""

import re
from typing import Callable, Dict, Optional, Protocol, Tuple

from ..errors import UtilityNotFound


class UtilityResolver(Protocol):
    def inline(self, keyword: str) -> Tuple[str, str]:
        """Return ``(selector, declaration)`` or raise ``UtilityNotFound``."""
        ...


# Default palette, shades 50-900
PALETTE: Dict[str, Dict[str, str]] = {
    "slate": {
        "50": "#f8fafc", "100": "#f1f5f9", "200": "#e2e8f0", "300": "#cbd5e1", "400": "#94a3b8",
        "500": "#64748b", "600": "#475569", "700": "#334155", "800": "#1e293b", "900": "#0f172a",
    },
    "gray": {
        "50": "#f9fafb", "100": "#f3f4f6", "200": "#e5e7eb", "300": "#d1d5db", "400": "#9ca3af",
        "500": "#6b7280", "600": "#4b5563", "700": "#374151", "800": "#1f2937", "900": "#111827",
    },
    "red": {
        "50": "#fef2f2", "100": "#fee2e2", "200": "#fecaca", "300": "#fca5a5", "400": "#f87171",
        "500": "#ef4444", "600": "#dc2626", "700": "#b91c1c", "800": "#991b1b", "900": "#7f1d1d",
    },
    "orange": {
        "50": "#fff7ed", "100": "#ffedd5", "200": "#fed7aa", "300": "#fdba74", "400": "#fb923c",
        "500": "#f97316", "600": "#ea580c", "700": "#c2410c", "800": "#9a3412", "900": "#7c2d12",
    },
    "amber": {
        "50": "#fffbeb", "100": "#fef3c7", "200": "#fde68a", "300": "#fcd34d", "400": "#fbbf24",
        "500": "#f59e0b", "600": "#d97706", "700": "#b45309", "800": "#92400e", "900": "#78350f",
    },
    "yellow": {
        "50": "#fefce8", "100": "#fef9c3", "200": "#fef08a", "300": "#fde047", "400": "#facc15",
        "500": "#eab308", "600": "#ca8a04", "700": "#a16207", "800": "#854d0e", "900": "#713f12",
    },
    "green": {
        "50": "#f0fdf4", "100": "#dcfce7", "200": "#bbf7d0", "300": "#86efac", "400": "#4ade80",
        "500": "#22c55e", "600": "#16a34a", "700": "#15803d", "800": "#166534", "900": "#14532d",
    },
    "blue": {
        "50": "#eff6ff", "100": "#dbeafe", "200": "#bfdbfe", "300": "#93c5fd", "400": "#60a5fa",
        "500": "#3b82f6", "600": "#2563eb", "700": "#1d4ed8", "800": "#1e40af", "900": "#1e3a8a",
    },
    "indigo": {
        "50": "#eef2ff", "100": "#e0e7ff", "200": "#c7d2fe", "300": "#a5b4fc", "400": "#818cf8",
        "500": "#6366f1", "600": "#4f46e5", "700": "#4338ca", "800": "#3730a3", "900": "#312e81",
    },
    "purple": {
        "50": "#faf5ff", "100": "#f3e8ff", "200": "#e9d5ff", "300": "#d8b4fe", "400": "#c084fc",
        "500": "#a855f7", "600": "#9333ea", "700": "#7e22ce", "800": "#6b21a8", "900": "#581c87",
    },
    "pink": {
        "50": "#fdf2f8", "100": "#fce7f3", "200": "#fbcfe8", "300": "#f9a8d4", "400": "#f472b6",
        "500": "#ec4899", "600": "#db2777", "700": "#be185d", "800": "#9d174d", "900": "#831843",
    },
}

SPECIAL_COLORS = {
    "white": "#ffffff",
    "black": "#000000",
    "transparent": "transparent",
    "current": "currentColor",
    "inherit": "inherit",
}

# (font-size, line-height)
FONT_SIZES = {
    "xs": ("0.75rem", "1rem"),
    "sm": ("0.875rem", "1.25rem"),
    "base": ("1rem", "1.5rem"),
    "lg": ("1.125rem", "1.75rem"),
    "xl": ("1.25rem", "1.75rem"),
    "2xl": ("1.5rem", "2rem"),
    "3xl": ("1.875rem", "2.25rem"),
    "4xl": ("2.25rem", "2.5rem"),
    "5xl": ("3rem", "1"),
    "6xl": ("3.75rem", "1"),
    "7xl": ("4.5rem", "1"),
    "8xl": ("6rem", "1"),
    "9xl": ("8rem", "1"),
}

FONT_WEIGHTS = {
    "thin": "100",
    "extralight": "200",
    "light": "300",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
    "extrabold": "800",
    "black": "900",
}

TEXT_ALIGN = {"left", "center", "right", "justify"}

LEADING = {
    "none": "1",
    "tight": "1.25",
    "snug": "1.375",
    "normal": "1.5",
    "relaxed": "1.625",
    "loose": "2",
}

TRACKING = {
    "tighter": "-0.05em",
    "tight": "-0.025em",
    "normal": "0em",
    "wide": "0.025em",
    "wider": "0.05em",
    "widest": "0.1em",
}

RADIUS = {
    "": "0.25rem",
    "none": "0px",
    "sm": "0.125rem",
    "md": "0.375rem",
    "lg": "0.5rem",
    "xl": "0.75rem",
    "2xl": "1rem",
    "3xl": "1.5rem",
    "full": "9999px",
}

BORDER_WIDTHS = {"0", "2", "4", "8"}

SPACING_STEPS = {
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 14, 16, 20, 24, 28, 32, 36,
    40, 44, 48, 52, 56, 60, 64, 72, 80, 96,
}

WIDTH_FRACTIONS = {
    "1/2": "50%",
    "1/3": "33.333333%",
    "2/3": "66.666667%",
    "1/4": "25%",
    "3/4": "75%",
    "full": "100%",
    "screen": "100vw",
    "auto": "auto",
}

OPACITY_STEPS = {0, 5, 10, 20, 25, 30, 40, 50, 60, 70, 75, 80, 90, 95, 100}

STATIC_UTILITIES = {
    "italic": "font-style:italic;",
    "not-italic": "font-style:normal;",
    "underline": "text-decoration-line:underline;",
    "line-through": "text-decoration-line:line-through;",
    "no-underline": "text-decoration-line:none;",
    "uppercase": "text-transform:uppercase;",
    "lowercase": "text-transform:lowercase;",
    "capitalize": "text-transform:capitalize;",
    "normal-case": "text-transform:none;",
    "block": "display:block;",
    "inline-block": "display:inline-block;",
    "inline": "display:inline;",
    "flex": "display:flex;",
    "grid": "display:grid;",
    "hidden": "display:none;",
    "border": "border-width:1px;border-style:solid;",
}

PADDING_SIDES = {
    "p": ("padding",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
}

MARGIN_SIDES = {
    "m": ("margin",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
}

_SPACING_RE = re.compile(r"^(-?)(p[xytrbl]?|m[xytrbl]?)-(\w+)$")
_DIGITS_RE = re.compile(r"[0-9]+")


def spacing_value(step: str) -> Optional[str]:
    """``4`` -> ``1rem``, ``px`` -> ``1px``; None for steps off the scale."""
    if step == "px":
        return "1px"
    if not _DIGITS_RE.fullmatch(step) or int(step) not in SPACING_STEPS:
        return None
    if step == "0":
        return "0px"
    return f"{int(step) / 4:g}rem"


def color_value(name: str) -> Optional[str]:
    """``red-500`` -> ``#ef4444``; None for unknown colours."""
    if name in SPECIAL_COLORS:
        return SPECIAL_COLORS[name]
    hue, _, shade = name.rpartition("-")
    return PALETTE.get(hue, {}).get(shade)


def _declarations(properties, value: str) -> str:
    return "".join(f"{prop}:{value};" for prop in properties)


class TailwindResolver:
    """
    Resolves Tailwind utility class names to inline CSS declarations.

    Stateless; one instance can be shared between chapters.
    """

    def __init__(self):
        self._prefix_rules: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
            ("text-", self._text),
            ("bg-", self._background),
            ("border-", self._border),
            ("font-", self._font_weight),
            ("leading-", self._leading),
            ("tracking-", self._tracking),
            ("rounded", self._rounded),
            ("opacity-", self._opacity),
            ("w-", self._width),
        )

    def inline(self, keyword: str) -> Tuple[str, str]:
        declaration = self.declaration(keyword)
        if declaration is None:
            raise UtilityNotFound(keyword)
        return f".{keyword}", declaration

    def declaration(self, keyword: str) -> Optional[str]:
        if keyword in STATIC_UTILITIES:
            return STATIC_UTILITIES[keyword]

        spacing = _SPACING_RE.match(keyword)
        if spacing:
            return self._spacing(*spacing.groups())

        for prefix, rule in self._prefix_rules:
            if keyword.startswith(prefix):
                declaration = rule(keyword[len(prefix):])
                if declaration is not None:
                    return declaration
        return None

    def _text(self, rest: str) -> Optional[str]:
        if rest in FONT_SIZES:
            size, line_height = FONT_SIZES[rest]
            return f"font-size:{size};line-height:{line_height};"
        if rest in TEXT_ALIGN:
            return f"text-align:{rest};"
        color = color_value(rest)
        return f"color:{color};" if color else None

    def _background(self, rest: str) -> Optional[str]:
        color = color_value(rest)
        return f"background-color:{color};" if color else None

    def _border(self, rest: str) -> Optional[str]:
        if rest in BORDER_WIDTHS:
            return f"border-width:{rest}px;border-style:solid;"
        color = color_value(rest)
        return f"border-color:{color};" if color else None

    def _font_weight(self, rest: str) -> Optional[str]:
        weight = FONT_WEIGHTS.get(rest)
        return f"font-weight:{weight};" if weight else None

    def _leading(self, rest: str) -> Optional[str]:
        if rest in LEADING:
            return f"line-height:{LEADING[rest]};"
        value = spacing_value(rest)
        return f"line-height:{value};" if value else None

    def _tracking(self, rest: str) -> Optional[str]:
        value = TRACKING.get(rest)
        return f"letter-spacing:{value};" if value else None

    def _rounded(self, rest: str) -> Optional[str]:
        if not rest:
            return f"border-radius:{RADIUS['']};"
        if not rest.startswith("-"):
            return None
        value = RADIUS.get(rest[1:]) if rest[1:] else None
        return f"border-radius:{value};" if value else None

    def _opacity(self, rest: str) -> Optional[str]:
        if not _DIGITS_RE.fullmatch(rest) or int(rest) not in OPACITY_STEPS:
            return None
        return f"opacity:{int(rest) / 100:g};"

    def _width(self, rest: str) -> Optional[str]:
        value = WIDTH_FRACTIONS.get(rest) or spacing_value(rest)
        return f"width:{value};" if value else None

    def _spacing(self, negative: str, prefix: str, step: str) -> Optional[str]:
        sides = PADDING_SIDES.get(prefix) or MARGIN_SIDES[prefix]
        is_margin = prefix.startswith("m")

        if step == "auto":
            return _declarations(sides, "auto") if is_margin and not negative else None
        if negative and not is_margin:
            return None

        value = spacing_value(step)
        if value is None:
            return None
        if negative and value != "0px":
            value = f"-{value}"
        return _declarations(sides, value)


_default_resolver = TailwindResolver()


def get_default_resolver() -> TailwindResolver:
    return _default_resolver
