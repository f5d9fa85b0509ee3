from __future__ import annotations


def format_duration(minutes: int) -> str:
    hours, remaining = divmod(minutes, 60)
    if hours == 0:
        return f"{remaining} min"
    if remaining == 0:
        return f"{hours} {'hour' if hours == 1 else 'hours'}"
    return f"{hours}h {remaining}min"
