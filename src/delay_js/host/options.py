"""Option store capability handed to handlers that read persisted configuration."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Mapping, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class OptionStore(Protocol):
    def get_option(self, name: str, default: Any = None) -> Any: ...

    def update_option(self, name: str, value: Any) -> bool: ...

    def delete_option(self, name: str) -> bool: ...


class InMemoryOptionStore:
    """Dict-backed option store; values are deep-copied on the way in and out."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._options: Dict[str, Any] = copy.deepcopy(dict(initial or {}))

    def get_option(self, name: str, default: Any = None) -> Any:
        if name not in self._options:
            return default
        return copy.deepcopy(self._options[name])

    def update_option(self, name: str, value: Any) -> bool:
        if name in self._options and self._options[name] == value:
            return False
        self._options[name] = copy.deepcopy(value)
        logger.debug("Option updated", extra={"event": "option.updated", "data": {"option": name}})
        return True

    def delete_option(self, name: str) -> bool:
        if name not in self._options:
            return False
        del self._options[name]
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._options


__all__ = ["InMemoryOptionStore", "OptionStore"]
