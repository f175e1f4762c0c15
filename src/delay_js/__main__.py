"""Module entrypoint for `python -m delay_js`."""

from delay_js.cli.app import main


if __name__ == "__main__":  # pragma: no cover - exercised via CLI tests
    main()
