"""Run the PIXS reminder service: ``python -m pixs``."""

from pixs.api.main import run

run()
