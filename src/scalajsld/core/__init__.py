"""Core / service layer — pure configuration logic and link orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem I/O (the orchestrator only talks to injected protocols).
* No imports from ``cli`` or ``infra``.
"""

from scalajsld.core.config_builder import build_classpath, build_link_configuration
from scalajsld.core.link_orchestrator import LinkOrchestrator
from scalajsld.core.models import (
    CheckedBehavior,
    ESFeatures,
    IRFile,
    LinkConfiguration,
    LinkState,
    ModuleInitializer,
    ModuleKind,
    Optimization,
    OptionModel,
    Semantics,
)
from scalajsld.core.parsers import parse_module_initializer, parse_module_kind
from scalajsld.core.protocols import ContainerDiscovery, IRContainer, Linker, LinkerOutput

__all__: list[str] = [
    "CheckedBehavior",
    "ContainerDiscovery",
    "ESFeatures",
    "IRContainer",
    "IRFile",
    "LinkConfiguration",
    "LinkOrchestrator",
    "LinkState",
    "Linker",
    "LinkerOutput",
    "ModuleInitializer",
    "ModuleKind",
    "Optimization",
    "OptionModel",
    "Semantics",
    "build_classpath",
    "build_link_configuration",
    "parse_module_initializer",
    "parse_module_kind",
]
