"""Run the CLI with ``python -m enterprise_groovy``."""

from .cli import main

if __name__ == "__main__":
    main()
