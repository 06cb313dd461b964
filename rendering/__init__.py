"""
Rendering module for growth snapshots.
Uses Cairo for resolution-independent vector graphics.
"""

from config.render_config import RenderConfig
from .growth_renderer import GrowthRenderer
from .exporters import (
    encode_information,
    snapshot,
    export_growth_data,
    load_growth_data
)
