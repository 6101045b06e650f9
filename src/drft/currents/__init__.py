"""Ocean current field: grid sampling, tidal model and data sources.

Public API
----------
CurrentVector     - one sampled current with derived color
TidalParams       - per-source constants of the tidal model
DataSource        - catalogue entry with ``get_grid()``
SourceRegistry    - ordered catalogue of data sources
SourceSelection   - the active source id
sample_points     - lattice over a bounding box
reference_grid    - nautical-mile reference grid lines
"""

from drft.currents.grid import grid_lines, reference_grid, sample_points
from drft.currents.models import CurrentVector, GridLine, TidalParams
from drft.currents.registry import DEFAULT_SOURCES, DataSource, SourceRegistry, SourceSelection
from drft.currents.tidal import speed_color, tidal_vector

__all__ = [
    "DEFAULT_SOURCES",
    "CurrentVector",
    "DataSource",
    "GridLine",
    "SourceRegistry",
    "SourceSelection",
    "TidalParams",
    "grid_lines",
    "reference_grid",
    "sample_points",
    "speed_color",
    "tidal_vector",
]
