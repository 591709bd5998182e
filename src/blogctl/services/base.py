"""BaseService: what every blogctl service is built on."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from blogctl.infrastructure.site import SiteGraph

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the :class:`SiteGraph` a service reads records and plugins from."""

    def __init__(self, site: SiteGraph) -> None:
        self._site = site

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Fire a lifecycle hook such as ``post_build``.

        A plugin that raises does not fail the operation; the failure is
        appended to *warnings* and logged at DEBUG with its traceback.
        """
        try:
            getattr(self._site.plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
