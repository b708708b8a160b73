"""Status colours for hierarchy nodes."""

from .models import StatusCategory

ROOT_COLOR = "#1E293B"
FALLBACK_COLOR = "#64748B"

STATUS_COLOR_MAP: dict[StatusCategory, str] = {
    StatusCategory.TO_DO: "#4C6EF5",
    StatusCategory.IN_PROGRESS: "#F59F00",
    StatusCategory.DONE: "#51CF66",
}

# Workflow statuses that get their own colour regardless of category
STATUS_NAME_COLOR_MAP: dict[str, str] = {
    "program backlog": "#8B5CF6",
    "implementing": "#0EA5E9",
}

DARK_TEXT = "#0F172A"
LIGHT_TEXT = "#F8FAFC"


def get_status_color(
    category: StatusCategory | None = None, status_name: str | None = None
) -> str:
    """Pick the fill colour for an issue.

    A known workflow status name takes precedence over the status category.
    """
    if status_name:
        color = STATUS_NAME_COLOR_MAP.get(status_name.lower().strip())
        if color:
            return color

    if category:
        return STATUS_COLOR_MAP.get(category, FALLBACK_COLOR)

    return FALLBACK_COLOR


def _to_linear(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def get_contrasting_text_color(hex_color: str) -> str:
    """Return dark or light text colour for legible text on ``hex_color``.

    Uses WCAG relative luminance. Anything that is not a 6-digit hex colour
    gets dark text.
    """
    normalized = hex_color.replace("#", "")
    if len(normalized) != 6:
        return DARK_TEXT

    try:
        r, g, b = (int(normalized[i : i + 2], 16) / 255 for i in (0, 2, 4))
    except ValueError:
        return DARK_TEXT

    luminance = (
        0.2126 * _to_linear(r) + 0.7152 * _to_linear(g) + 0.0722 * _to_linear(b)
    )
    return DARK_TEXT if luminance > 0.5 else LIGHT_TEXT


def get_status_label_color(
    category: StatusCategory | None = None, status_name: str | None = None
) -> str:
    return get_contrasting_text_color(get_status_color(category, status_name))
