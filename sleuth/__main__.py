"""Allow `python -m sleuth`."""

from .cli import main

main()
