"""Allow ``python -m elfcat``."""

from elfcat.cli import main

main()
