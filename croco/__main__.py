"""Allow ``python -m croco``."""

from croco.coordinator import main

main()
