# davinci_shared/__main__.py
# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)
import os
import sys

from . import version
from .core.sysinfo import cpu_count, unix_timestamp

PRODUCT_NAME = "DaVinci shared-rust"


def main(argv=None, stream=None) -> int:
    """Print the version banner and both readings. Arguments are ignored."""
    out = stream if stream is not None else sys.stdout
    if out is None:
        # Started without a usable fd 1.
        return 1
    try:
        out.write(f"{PRODUCT_NAME} v{version()}\n")
        out.write(f"CPU cores: {cpu_count()}\n")
        out.write(f"Unix timestamp: {unix_timestamp()}\n")
        out.flush()
    except (OSError, ValueError):
        # ValueError: write to a closed file object.
        if stream is None:
            _silence_stdout()
        return 1
    return 0


def _silence_stdout():
    # Buffered bytes would be flushed again at interpreter exit.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
    except (OSError, ValueError, AttributeError):
        sys.stdout = None


def run():
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
