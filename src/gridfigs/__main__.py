from __future__ import annotations

import sys

from gridfigs.viz.generate_all_figures import main

sys.exit(main())
