#!/usr/bin/env python
"""Desktop app entrypoint for SpendTrack."""

from spendtrack.desktop.app import run

if __name__ == "__main__":
    run()
