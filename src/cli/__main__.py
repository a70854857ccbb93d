"""Permite `python -m cli ...` sin el script `myflix` instalado."""

from cli.main import run

if __name__ == "__main__":
    run()
