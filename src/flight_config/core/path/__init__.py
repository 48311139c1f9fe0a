# src/flight_config/core/path/__init__.py
"""
Resolução de paths do Flight Config.

    - parser   → `parse_path`: string → segmentos `Field` / `Index`
    - resolver → `locate`: segmentos → `Resolution` sobre o documento
"""

from .parser import Field, Index, Segment, format_path, parse_path
from .resolver import PathLike, Resolution, locate

__all__ = ["Field", "Index", "PathLike", "Resolution", "Segment", "format_path", "locate", "parse_path"]
