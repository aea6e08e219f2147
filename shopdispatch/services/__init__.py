"""Services layer - Application orchestration.

Available services:
- PathReporter: Distances, tie counts and rendered paths
- ShopDispatchService: Nearest shops for a client (both directions)
- TaxiDispatchService: Nearest taxis for a client and route to a shop
- SimulationRunner: Serves every request of a simulation
"""

from .dispatch import NearestCandidates, ShopDispatchService, TaxiDispatchService
from .path_reporter import PathReporter
from .simulator import SimulationRunner

__all__ = [
    "PathReporter",
    "NearestCandidates",
    "ShopDispatchService",
    "TaxiDispatchService",
    "SimulationRunner",
]
