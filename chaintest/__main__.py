"""Allow running the CLI with ``python -m chaintest``."""

from chaintest.cli import main

if __name__ == "__main__":
    main()
