from __future__ import annotations

from .app.headless import build_config, main, run_headless

__all__ = ["build_config", "main", "run_headless"]


if __name__ == "__main__":
    main()
