"""Run script.

Why it exists:
- Lets the CLI run as `python src/main.py` during development.
- Keeps a simple entrypoint next to the installed `cfddns` script.
"""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
