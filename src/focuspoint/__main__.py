"""Entry point for python -m focuspoint."""

from focuspoint.cli import app

if __name__ == "__main__":
    app()
