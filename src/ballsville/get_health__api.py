"""API health check handler."""

from ballsville import __version__
from ballsville.utils.now import Now

_HEALTH_SERVICE = "ballsville"


def health() -> dict[str, str]:
    """Return health check payload."""
    return {
        "status": "ok",
        "service": _HEALTH_SERVICE,
        "version": __version__,
        "timestamp": Now.as_datetime().isoformat(),
    }
