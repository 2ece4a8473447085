"""Entry point for `python -m apidiff_cli` and `javaapidiff` console script."""

from __future__ import annotations

from apidiff_cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
