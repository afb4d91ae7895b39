"""Icon glyphs and label rendering for timeline presentations."""

from __future__ import annotations

from rich.text import Text

from rewind.timeline.models import IconRef, Presentation

# Icon glyphs keyed by IconRef.name
ICON_GLYPHS: dict[str, str] = {
    "diff-added": "+",
    "diff-modified": "~",
    "diff-removed": "-",
    "git-commit": "\u25cf",  # ●
}

# Rich styles keyed by IconRef.color
ICON_COLORS: dict[str, str] = {
    "green": "green3",
    "yellow": "yellow3",
    "red": "red1",
}

_DEFAULT_GLYPH = "\u25b8"  # ▸


def icon_glyph(icon: IconRef | None) -> str:
    if icon is None:
        return _DEFAULT_GLYPH
    return ICON_GLYPHS.get(icon.name, _DEFAULT_GLYPH)


def render_presentation(presentation: Presentation) -> Text:
    """Render a presentation as a Rich Text label for the tree widget."""
    icon = presentation.icon
    style = ""
    if icon is not None and icon.color:
        style = ICON_COLORS.get(icon.color, icon.color)

    text = Text()
    text.append(f"{icon_glyph(icon)} ", style=style)
    text.append(presentation.label)
    if presentation.description:
        text.append(f"  {presentation.description}", style="dim")
    return text


def plain_presentation(presentation: Presentation) -> str:
    """Render a presentation as one line of plain text."""
    line = f"{icon_glyph(presentation.icon)} {presentation.label}"
    if presentation.description:
        line += f"  {presentation.description}"
    return line
