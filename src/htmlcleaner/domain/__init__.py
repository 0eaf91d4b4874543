"""Domain layer - Allow-list, policy and result models."""

from .models import AllowList, CleanerConfig, CleanResult, CleanStats, PolicyFlags

__all__ = ["AllowList", "CleanerConfig", "CleanResult", "CleanStats", "PolicyFlags"]
