# -*- coding: utf-8 -*-

"""
Command-line entry point running one named transform over an SVG document.

Usage::

    python run.py annotate input.svg output.svg
    python run.py namespace fragment.svg out.svg [prefix [x_offset y_offset]]
"""

import logging
import sys

from svgtextbox_toolkit.core.exceptions import TransformError
from svgtextbox_toolkit.core.services import TransformService
from svgtextbox_toolkit.logging_config import setup_logging

USAGE = "usage: run.py <transform> <input> <output> [prefix [x_offset y_offset]]"


def main(argv=None):
    """
    Configure logging, run the requested transform, return the exit status.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print(USAGE, file=sys.stderr)
        return 2

    setup_logging()

    name, source, destination, extra = args[0], args[1], args[2], args[3:]
    params = {}
    if name == "namespace":
        for key, value in zip(("prefix", "x_offset", "y_offset"), extra):
            params[key] = value

    service = TransformService()
    try:
        service.transform_file(name, source, destination, **params)
    except (TransformError, OSError) as e:
        logging.getLogger(__name__).error("Transform failed: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    status = main()
    logging.info("===== Transform finished =====")
    sys.exit(status)
