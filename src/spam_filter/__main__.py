"""Allow ``python -m spam_filter``."""

from .cli import main

main()
