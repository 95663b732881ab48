"""Omurice: maid-cafe ketchup drawing simulator.

This package contains the stroke growth simulation, the dish and ketchup
renderers, the committed/active compositor and the interactive pygame
frontend that lets a user draw on an omurice plate.

Architecture layers (strict one-way dependency):
    scripts/ → omurice/app/ → omurice/simulator/ → omurice/utils/

Key invariants:
    - Stroke geometry is normalized to [0,1]² of the canvas; pixels only at render time
    - Backing rasters are 2× the display size
    - Committed strokes are rasterized exactly once
    - YAML-only configs, validated with pydantic
"""

__version__ = "1.2.0"
