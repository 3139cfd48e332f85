"""Entry point for running the CLI via ``python -m campaign_calendar``."""

from .cli import main


if __name__ == "__main__":  # pragma: no cover - manual usage
    raise SystemExit(main())
