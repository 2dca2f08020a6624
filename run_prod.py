#!/usr/bin/env python
"""Production server: no hot reload, INFO-level console logging."""

import os

os.environ["DEV__RELOAD"] = "false"

from inkdown import main

if __name__ in {"__main__", "__mp_main__"}:
    main()
