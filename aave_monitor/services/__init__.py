"""Service modules"""
from .monitor import Monitor
from .scheduler import Scheduler, SchedulerState

__all__ = ["Monitor", "Scheduler", "SchedulerState"]
