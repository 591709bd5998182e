"""PluginManager — pluggy wiring for the build pipeline.

Plugins come from three places, registered in this order:

1. ``blogctl.plugins`` entry points (pip-installed packages),
2. single-file modules in the site's ``.blogctl/plugins/`` directory,
3. the built-ins enabled in ``blogctl.toml`` (prism, twemoji, helmet,
   permalinks).

pluggy calls implementations last-registered-first, so the collecting
helpers below reverse the results to get registration order back.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

import pluggy

from blogctl.plugins.hookspecs import BlogctlHookSpec

if TYPE_CHECKING:
    from markdown.extensions import Extension

    from blogctl.config.settings import BlogSettings
    from blogctl.domain.records import SiteMetadata

PROJECT_NAME = "blogctl"
ENTRY_POINT_GROUP = "blogctl.plugins"
LOCAL_MODULE_PREFIX = "blogctl_local_plugin_"

logger = logging.getLogger(__name__)


def _is_plugin_class(obj: object) -> bool:
    """True for classes with at least one public ``@hookimpl`` method."""
    if not inspect.isclass(obj):
        return False
    return any(
        getattr(member, f"{PROJECT_NAME}_impl", None) is not None
        for name, member in inspect.getmembers(obj, callable)
        if not name.startswith("_")
    )


def _import_file(py_file: Path, module_name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        raise ImportError(f"no module spec for {py_file}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    return module


class PluginManager:
    """Registers blogctl plugins and collects their hook results."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(BlogctlHookSpec)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        """Whether :meth:`discover_and_load` has run."""
        return self._loaded

    # -- Registration ---------------------------------------------------

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        plugin_name = name or type(plugin).__name__
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin: %s", plugin_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        """Registered plugins, oldest registration first."""
        return [plugin for _, plugin in self._pm.list_name_plugin() if plugin is not None]

    def list_plugin_names(self) -> list[str]:
        return [name for name, plugin in self._pm.list_name_plugin() if plugin is not None]

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then single-file plugins from *local_dir*.

        Returns the names of every registered plugin afterwards.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None and local_dir.is_dir():
            for py_file in sorted(local_dir.glob("*.py")):
                if not py_file.name.startswith("_"):
                    self._load_local_file(py_file)
        self._loaded = True
        return self.list_plugin_names()

    def register_builtins(self, settings: BlogSettings) -> None:
        """Register the built-in plugins that ``blogctl.toml`` enables.

        The permalink plugin is always on; it is ``trylast`` so any other
        ``node_fields`` implementation wins.
        """
        from blogctl.plugins.builtins.helmet import HelmetPlugin
        from blogctl.plugins.builtins.permalinks import PermalinkPlugin
        from blogctl.plugins.builtins.prism import PrismPlugin
        from blogctl.plugins.builtins.twemoji import TwemojiPlugin

        self.register_plugin(PermalinkPlugin(), name="permalinks-builtin")
        markdown = settings.markdown
        if markdown.prism.enabled:
            self.register_plugin(PrismPlugin(markdown.prism), name="prism-builtin")
        if markdown.twemoji.enabled:
            self.register_plugin(TwemojiPlugin(markdown.twemoji), name="twemoji-builtin")
        if settings.helmet.enabled:
            self.register_plugin(HelmetPlugin(settings.helmet), name="helmet-builtin")

    # -- Collected hook results -----------------------------------------

    def markdown_extensions(self, settings: BlogSettings) -> list[Extension]:
        extensions: list[Extension] = []
        for contributed in reversed(self.hook.markdown_extensions(settings=settings)):
            extensions.extend(contributed or [])
        return extensions

    def stylesheets(self, settings: BlogSettings) -> dict[str, str]:
        """Plugin stylesheets keyed by filename, in registration order."""
        sheets: dict[str, str] = {}
        for contributed in reversed(self.hook.site_stylesheets(settings=settings)):
            sheets.update(contributed or {})
        return sheets

    def head_tags(self, site: SiteMetadata, page_title: str) -> list[str]:
        tags: list[str] = []
        for contributed in reversed(self.hook.head_tags(site=site, page_title=page_title)):
            tags.extend(contributed or [])
        return tags

    # -- Internals ------------------------------------------------------

    def _load_local_file(self, py_file: Path) -> None:
        """Import one ``.blogctl/plugins`` file and register its plugin classes.

        A broken file is logged and skipped; the site still builds.
        """
        module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
        try:
            module = _import_file(py_file, module_name)
        except Exception:
            logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
            return

        classes: list[type[Any]] = [
            obj
            for _, obj in inspect.getmembers(module, _is_plugin_class)
            if obj.__module__ == module_name
        ]
        for cls in classes:
            name = module_name if len(classes) == 1 else f"{module_name}.{cls.__name__}"
            try:
                self.register_plugin(cls(), name=name)
            except Exception:
                logger.warning(
                    "Failed to instantiate plugin %s from %s", cls.__name__, py_file, exc_info=True
                )

    def _normalize_plugin_instances(self) -> None:
        """Swap plugin classes registered by entry points for instances.

        Hook calls on a class object would leave ``self`` unbound.
        """
        for plugin in self.get_plugins():
            if not _is_plugin_class(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__  # type: ignore[attr-defined]
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=name)  # type: ignore[operator]
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            logger.debug("Instantiated entry-point plugin: %s", name)
