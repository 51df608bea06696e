from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 3
ERR_PREREQ = 5
ERR_DISCOVERY = 10
ERR_DERIVATION = 11
ERR_GENERATION = 12
ERR_INTERNAL = 99
