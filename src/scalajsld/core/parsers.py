"""Token parsers for flag values that carry structure.

Both parsers are pure: they either return a domain value or raise a
:class:`~scalajsld.exceptions.UsageError` subclass.  Turning that error
into a usage message is the argument-parsing layer's job.
"""

from __future__ import annotations

from scalajsld.core.models import ModuleInitializer, ModuleKind
from scalajsld.exceptions import InvalidMainMethodFormat, UnknownModuleKind


def parse_module_initializer(token: str) -> ModuleInitializer:
    """Parse ``full.name.Object.main`` into a :class:`ModuleInitializer`.

    The owner is everything before the last ``.``, the method name is
    everything after it.

    Raises
    ------
    InvalidMainMethodFormat
        When *token* contains no ``.``.
    """
    owner, dot, method = token.rpartition(".")
    if not dot:
        raise InvalidMainMethodFormat(f"{token} is not a valid main method")
    return ModuleInitializer(class_name=owner, method_name=method)


def parse_module_kind(token: str) -> ModuleKind:
    """Return the :class:`ModuleKind` whose display name equals *token*.

    Matching is case-sensitive.

    Raises
    ------
    UnknownModuleKind
        When no member matches.
    """
    for kind in ModuleKind:
        if kind.value == token:
            return kind
    raise UnknownModuleKind(
        f"{token} is not a valid module kind",
        hint="Valid kinds: " + ", ".join(kind.value for kind in ModuleKind),
    )
