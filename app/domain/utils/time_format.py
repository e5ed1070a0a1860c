from datetime import datetime, timezone

utc_now = lambda: datetime.now(timezone.utc)  # noqa: E731


def format_elapsed(seconds: int) -> str:
    """Render elapsed seconds as mm:ss; minutes keep growing past 59."""
    seconds = max(int(seconds), 0)
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"
