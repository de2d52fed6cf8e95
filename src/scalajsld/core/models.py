"""Domain models for scalajsld.

All models are **frozen** dataclasses or enums — immutable value objects
with no behaviour beyond data access and copy-with-change helpers.  They
carry zero I/O and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ModuleKind(Enum):
    """Packaging style of the generated JavaScript output.

    Member values are the canonical display names accepted on the
    command line.
    """

    NO_MODULE = "NoModule"
    ES_MODULE = "ESModule"
    COMMONJS_MODULE = "CommonJSModule"

    def __str__(self) -> str:
        return self.value


class CheckedBehavior(Enum):
    """How strictly a class of undefined behaviour is checked at runtime."""

    COMPLIANT = "Compliant"
    FATAL = "Fatal"
    UNCHECKED = "Unchecked"

    @property
    def optimized(self) -> CheckedBehavior:
        """Variant used for fully optimized output.

        ``Fatal`` checks are dropped; ``Compliant`` and ``Unchecked``
        are kept as they are.
        """
        if self is CheckedBehavior.FATAL:
            return CheckedBehavior.UNCHECKED
        return self


class Optimization(Enum):
    """Optimization level selected by ``-n``, ``-f`` and ``-u``."""

    NO = "noOpt"
    FAST = "fastOpt"
    FULL = "fullOpt"


# ---------------------------------------------------------------------------
# Linker-facing profiles
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Semantics:
    """Bundle of runtime-check strictness choices."""

    as_instance_ofs: CheckedBehavior = CheckedBehavior.FATAL
    """Behaviour of failing ``asInstanceOf`` casts."""

    array_index_out_of_bounds: CheckedBehavior = CheckedBehavior.FATAL
    """Behaviour of out-of-bounds array accesses."""

    module_init: CheckedBehavior = CheckedBehavior.UNCHECKED
    """Behaviour of cyclic module initialization."""

    strict_floats: bool = False
    production_mode: bool = False

    @classmethod
    def defaults(cls) -> Semantics:
        return cls()

    def with_as_instance_ofs(self, behavior: CheckedBehavior) -> Semantics:
        return replace(self, as_instance_ofs=behavior)

    def optimized(self) -> Semantics:
        """Return the variant used under full optimization."""
        return replace(
            self,
            as_instance_ofs=self.as_instance_ofs.optimized,
            array_index_out_of_bounds=self.array_index_out_of_bounds.optimized,
            module_init=self.module_init.optimized,
            production_mode=True,
        )


@dataclass(frozen=True, slots=True)
class ESFeatures:
    """ECMAScript language features the output may rely on."""

    use_ecmascript_2015: bool = False

    @classmethod
    def defaults(cls) -> ESFeatures:
        return cls()

    def with_use_ecmascript_2015(self, enabled: bool) -> ESFeatures:
        return replace(self, use_ecmascript_2015=enabled)


# ---------------------------------------------------------------------------
# Module initializers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ModuleInitializer:
    """Entry point invoked automatically when the linked output loads.

    Built from the command line, it targets a ``main(Array[String])``
    method called with the literal arguments in :attr:`args`.
    """

    class_name: str
    """Fully qualified name of the owning object."""

    method_name: str
    """Name of the method to invoke."""

    args: tuple[str, ...] = ()
    """String literals passed as the ``Array[String]`` argument."""

    def __str__(self) -> str:
        return f"{self.class_name}.{self.method_name}"


# ---------------------------------------------------------------------------
# Option model
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OptionModel:
    """Configuration accumulated while scanning the command line.

    The model is never mutated: each recognized flag produces a new
    instance via :func:`dataclasses.replace`.
    """

    classpath: tuple[Path, ...] = ()
    module_initializers: tuple[ModuleInitializer, ...] = ()
    output: Path | None = None
    semantics: Semantics = field(default_factory=Semantics.defaults)
    es_features: ESFeatures = field(default_factory=ESFeatures.defaults)
    module_kind: ModuleKind = ModuleKind.NO_MODULE
    optimization: Optimization = Optimization.FAST
    pretty_print: bool = False
    source_map: bool = False
    relativize_source_map: str | None = None
    """Directory ``file:`` URI that source-map paths are made relative to."""
    check_ir: bool = False
    stdlib: Path | None = None
    log_level: int = logging.INFO


# ---------------------------------------------------------------------------
# Derived link configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LinkConfiguration:
    """Immutable configuration handed to the linker backend."""

    semantics: Semantics
    module_kind: ModuleKind
    es_features: ESFeatures
    check_ir: bool
    optimizer: bool
    parallel: bool
    source_map: bool
    relativize_source_map_base: str | None
    closure_compiler: bool
    pretty_print: bool
    batch_mode: bool


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class IRFile:
    """Handle on a single ``.sjsir`` file inside a container."""

    container: Path
    """Directory, archive or file the IR was found in."""

    relative_path: str
    """POSIX path of the file inside :attr:`container` (empty for a bare file)."""

    @property
    def path(self) -> str:
        if not self.relative_path:
            return str(self.container)
        return f"{self.container}:{self.relative_path}"


class LinkState(Enum):
    """Lifecycle of a single link run."""

    IDLE = "Idle"
    RESOLVING_INPUTS = "ResolvingInputs"
    LINKING = "Linking"
    DONE = "Done"
    FAILED = "Failed"
