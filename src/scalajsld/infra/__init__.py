"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem and the external
linker backend.  Every raw exception must be caught here and re-raised
as a :class:`~scalajsld.exceptions.ScalajsldError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from scalajsld.infra.ir_containers import FileIRContainerDiscovery, read_ir_file
from scalajsld.infra.linker_backend import load_linker
from scalajsld.infra.linker_output import FileLinkerOutput

__all__: list[str] = [
    "FileIRContainerDiscovery",
    "FileLinkerOutput",
    "load_linker",
    "read_ir_file",
]
