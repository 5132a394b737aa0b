# config.py
from __future__ import annotations

# ---------------------------
# Workload
# ---------------------------
TASK_COUNT = 20
TASK_DELAY_S = 0.1  # simulated processing cost per task

# ---------------------------
# Pool
# ---------------------------
WORKER_COUNT = 4

# Overall wait before the pool is force-stopped
TIMEOUT_S = 60.0

# How long stopped workers get to unwind after the timeout fires
SHUTDOWN_GRACE_S = 1.0

# ---------------------------
# Output sink
# ---------------------------
OUTPUT_TARGET = "output.txt"

# Truncate the output file before a run (records are appended otherwise)
RESET_OUTPUT = False

# ---------------------------
# Diagnostics
# ---------------------------
TRACE = True
