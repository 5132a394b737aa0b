# schemas.py

from __future__ import annotations
from pydantic import BaseModel, Field

import config


class PoolSettings(BaseModel):
    task_count: int = Field(default=config.TASK_COUNT, ge=0)
    worker_count: int = Field(default=config.WORKER_COUNT, ge=1)
    output_target: str = Field(default=config.OUTPUT_TARGET, min_length=1)
    timeout_s: float = Field(default=config.TIMEOUT_S, gt=0)
    task_delay_s: float = Field(default=config.TASK_DELAY_S, ge=0)
    shutdown_grace_s: float = Field(default=config.SHUTDOWN_GRACE_S, ge=0)
    reset_output: bool = config.RESET_OUTPUT
    trace: bool = config.TRACE
