from __future__ import annotations

import logging

ROOT_LOGGER = "clprobe"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single rich handler on stderr; stdout stays reserved for the report."""
    from rich.console import Console
    from rich.logging import RichHandler

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.handlers.clear()
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.propagate = False
    return root
