"""scalajsld — command-line frontend for the Scala.js linker.

Turns command-line flags into a link configuration, resolves the IR
classpath, and drives a single link to completion.
"""

from scalajsld.version import __version__

__all__: list[str] = ["__version__"]
