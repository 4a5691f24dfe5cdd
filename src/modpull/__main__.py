"""Allow running modpull with ``python -m modpull``."""

from modpull.cli import main

raise SystemExit(main())
