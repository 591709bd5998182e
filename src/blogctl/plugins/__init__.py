"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures in post_build are warnings, never errors.
"""

import pluggy

from blogctl.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("blogctl")

__all__ = ["PluginManager", "hookimpl"]
