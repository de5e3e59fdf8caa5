"""Allow ``python -m seedreammcp``."""

from seedreammcp.server import main

main()
