"""Derive the link configuration and classpath from a final OptionModel.

Guarantees
----------
* Pure — no I/O, no logging.
* No error conditions: the argument parser has already validated the
  model.
"""

from __future__ import annotations

from pathlib import Path

from scalajsld.core.models import LinkConfiguration, OptionModel, Optimization


def build_classpath(options: OptionModel) -> tuple[Path, ...]:
    """Return the effective classpath, standard library first."""
    if options.stdlib is None:
        return options.classpath
    return (options.stdlib, *options.classpath)


def build_link_configuration(options: OptionModel) -> LinkConfiguration:
    """Translate *options* into a :class:`LinkConfiguration`.

    Rules
    -----
    * ``fullOpt`` upgrades the semantics to their optimized variant and
      turns on the Closure Compiler.
    * The optimizer runs unless ``noOpt`` is selected.
    * Parallel and batch mode are always on.
    """
    full_opt = options.optimization is Optimization.FULL
    semantics = options.semantics.optimized() if full_opt else options.semantics

    return LinkConfiguration(
        semantics=semantics,
        module_kind=options.module_kind,
        es_features=options.es_features,
        check_ir=options.check_ir,
        optimizer=options.optimization is not Optimization.NO,
        parallel=True,
        source_map=options.source_map,
        relativize_source_map_base=options.relativize_source_map,
        closure_compiler=full_opt,
        pretty_print=options.pretty_print,
        batch_mode=True,
    )
