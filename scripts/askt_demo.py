"""Run the adaptive colocalization demo on a synthetic phantom pair."""

from __future__ import annotations

from adaptivecoloc.cli import demo_main


def main() -> int:
    return demo_main()


if __name__ == "__main__":
    raise SystemExit(main())
