"""Allow `python -m studio_automator.cli`."""

from .app import main

if __name__ == "__main__":
    main()
