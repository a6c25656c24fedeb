"""
Primitive names of the standard GPHH routing-policy alphabet for UCARP.

Only the names matter here; what each terminal measures lives in the
routing simulator, not in this package.

    SC    serving cost             CFD   cost from depot
    CFH   cost from here           CTD   cost to depot
    CR    cost refill              DC    demand of candidate
    DEM   expected demand          RQ    remaining capacity
    FULL  fullness of vehicle      FRT   fraction of remaining tasks
    FUT   fraction of unserved     CFR1  cost from the route's 1st task
    CTT1  cost to the 1st task     DEM1  demand of the 1st task
"""

from .adapter import SymbolAdapter
from ..core.vector import ERC

UCARP_TERMINALS = (
    "SC", "CFD", "CFH", "CTD", "CR", "DC", "DEM", "RQ",
    "FULL", "FRT", "FUT", "CFR1", "CTT1", "DEM1", ERC,
)

UCARP_FUNCTIONS = ("+", "-", "*", "/", "min", "max")


def make_ucarp_adapter(erc_range=(0.0, 1.0)) -> SymbolAdapter:
    return SymbolAdapter.binary(UCARP_FUNCTIONS, UCARP_TERMINALS,
                                erc_range=erc_range)
