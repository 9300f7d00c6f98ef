"""Logger factory for gql-scalagen.

All core modules log through children of the ``gql_scalagen`` logger so
a single ``logging`` configuration (see ``--verbose`` on the CLI) controls
resolution traces.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "gql_scalagen"


def get_logger(name: str | None = None, logger: logging.Logger | None = None) -> logging.Logger:
    """Return the package logger, a named child of it, or ``logger`` when given."""
    if logger is not None:
        return logger
    base = logging.getLogger(LOGGER_NAME)
    return base.getChild(name) if name else base
