"""
Running intelligence: training load, race predictions, running personality
and daily recommendations computed from a runner's activity history.
"""

from .engine import compute_intelligence
from .models import IntelligenceData, RunEntry

__version__ = "0.1.0"

__all__ = ["IntelligenceData", "RunEntry", "compute_intelligence", "__version__"]
