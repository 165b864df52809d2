"""Entry point for 'python -m wrappedup'."""

from wrappedup.cli import main

if __name__ == "__main__":
    main()
