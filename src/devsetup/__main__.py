"""Allow ``python -m devsetup``."""

from devsetup.cli import main

if __name__ == "__main__":
    main()
