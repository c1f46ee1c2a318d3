from __future__ import annotations

import os

# Outer attempts per exercise before generation gives up on that slot.
MAX_ATTEMPTS = int(os.getenv("PRIMATRAIN_MAX_ATTEMPTS", "100"))

# Hard cap on exercises per request / CLI run.
MAX_EXERCISES = int(os.getenv("PRIMATRAIN_MAX_EXERCISES", "10000"))

LOG_LEVEL = os.getenv("PRIMATRAIN_LOG_LEVEL", "INFO").upper()

# Upper bound on count * max_attempts for one generation request.
ATTEMPT_BUDGET = int(os.getenv("PRIMATRAIN_ATTEMPT_BUDGET", "100000"))
