"""Permite `python -m tmapi`."""

from tmapi.cli.main import run

if __name__ == "__main__":
    run()
