"""Entry point for `python -m modelrouter`."""

from modelrouter.cli.commands import app

if __name__ == "__main__":
    app()
