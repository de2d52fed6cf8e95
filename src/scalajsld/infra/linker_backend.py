"""Locate the external linking engine.

The linker itself is not part of scalajsld.  Backends are installed as
separate distributions that register a factory under the
``scalajsld.linkers`` entry-point group::

    [project.entry-points."scalajsld.linkers"]
    standard = "my_backend:create_linker"

The factory receives the :class:`~scalajsld.core.models.LinkConfiguration`
and returns an object satisfying :class:`~scalajsld.core.protocols.Linker`.
When several backends are installed, ``SCALAJSLD_LINKER`` picks one by
name.
"""

from __future__ import annotations

import logging
import os
from importlib.metadata import EntryPoint, entry_points

from scalajsld.core.models import LinkConfiguration
from scalajsld.core.protocols import Linker
from scalajsld.exceptions import EnvironmentError

_log = logging.getLogger(__name__)

ENTRY_POINT_GROUP: str = "scalajsld.linkers"
LINKER_ENV_VAR: str = "SCALAJSLD_LINKER"


def available_backends() -> list[EntryPoint]:
    """Return installed linker backends sorted by name."""
    return sorted(entry_points(group=ENTRY_POINT_GROUP), key=lambda ep: ep.name)


def _select(backends: list[EntryPoint], name: str | None) -> EntryPoint:
    if name:
        for ep in backends:
            if ep.name == name:
                return ep
        installed = ", ".join(ep.name for ep in backends) or "none"
        raise EnvironmentError(
            f"Linker backend '{name}' is not installed.",
            hint=f"Installed backends: {installed}. Unset {LINKER_ENV_VAR} to use the default.",
        )
    if not backends:
        raise EnvironmentError(
            "No Scala.js linker backend is installed.",
            hint=(
                "Install a package that registers a "
                f"'{ENTRY_POINT_GROUP}' entry point."
            ),
        )
    return backends[0]


def load_linker(config: LinkConfiguration, *, name: str | None = None) -> Linker:
    """Create a linker for *config* from the selected backend.

    Parameters
    ----------
    config:
        Link configuration handed to the backend factory.
    name:
        Backend to use.  Defaults to ``$SCALAJSLD_LINKER``, then to the
        first installed backend.

    Raises
    ------
    EnvironmentError
        When no matching backend is installed or it fails to load.
    """
    ep = _select(available_backends(), name or os.getenv(LINKER_ENV_VAR))
    _log.debug("Using linker backend %s (%s)", ep.name, ep.value)
    try:
        factory = ep.load()
        return factory(config)
    except Exception as exc:
        raise EnvironmentError(
            f"Cannot load linker backend '{ep.name}': {exc}",
        ) from exc
