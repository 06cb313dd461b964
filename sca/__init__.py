"""
Space Colonization Algorithm (SCA) for 2D and 3D branching structures.

Based on: "Modeling Trees with a Space Colonization Algorithm"
by Runions, Lane, and Prusinkiewicz (2007).
"""

from .vector import SqDist
from .node import Node
from .arena import NodeArena
from .attractor import Attractor, ConnectAction
from .pool import AttractorPool
from .config import SCAConfig
from .engine import SpaceColonization

__all__ = [
    'SqDist',
    'Node',
    'NodeArena',
    'Attractor',
    'ConnectAction',
    'AttractorPool',
    'SCAConfig',
    'SpaceColonization',
]
