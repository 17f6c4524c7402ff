"""Namespaced loggers for llaves.

Every module logs under ``llaves.<module>``. Attribute handling reports at
DEBUG level only: dropped keys, brackets kept as literal text, duplicate
link references and rejected plugin names. Nothing is raised for those, so
the records are the way to find out why a bracket had no effect.

The library never installs handlers; applications decide where records go.

Example:
    >>> import logging
    >>> logging.getLogger("llaves.attributes").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

ROOT = "llaves"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` under the ``llaves`` namespace.

    Module names already inside the package are used as is.

    Example:
        >>> get_logger("mymodule").name
        'llaves.mymodule'
    """
    if not (name == ROOT or name.startswith(f"{ROOT}.")):
        name = f"{ROOT}.{name}"
    return logging.getLogger(name)
