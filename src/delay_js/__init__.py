"""Public API for :mod:`delay_js`."""

from importlib import metadata
from pathlib import Path
import tomllib


def _pyproject_version() -> str | None:
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        parsed = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        version = parsed.get("project", {}).get("version")
        if isinstance(version, str) and version:
            return version
    except (FileNotFoundError, OSError, tomllib.TOMLDecodeError):
        return None
    return None


def _resolve_version() -> str:
    # Prefer the local pyproject when running from a source checkout/editable install.
    version = _pyproject_version()
    if version is not None:
        return version

    try:
        return metadata.version("delay-js")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "unknown"


__version__ = _resolve_version()

from delay_js.admin.settings import Settings  # noqa: E402
from delay_js.admin.subscriber import Subscriber  # noqa: E402
from delay_js.events.manager import EventManager  # noqa: E402
from delay_js.infrastructure.settings import RuntimeSettings  # noqa: E402
from delay_js.models.events import EventName, Notice, Subscription  # noqa: E402
from delay_js.plugin import DelayJsPlugin  # noqa: E402

__all__ = [
    "DelayJsPlugin",
    "EventManager",
    "EventName",
    "Notice",
    "RuntimeSettings",
    "Settings",
    "Subscriber",
    "Subscription",
    "__version__",
]
