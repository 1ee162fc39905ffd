from __future__ import annotations

from rubima.main import main

raise SystemExit(main())
