"""Entry point for the 'python -m wastelink' command."""

from wastelink.cli import main

if __name__ == "__main__":
    main()
