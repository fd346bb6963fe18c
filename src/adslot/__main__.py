"""Entry point for `python -m adslot` and `adslot` CLI."""

from adslot.cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
