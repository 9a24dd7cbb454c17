"""Finder-pattern scanning and marker clustering."""

from qrcore.finder.finder_pattern_scanner import FinderPatternScanner
from qrcore.finder.marker_clusterer import MarkerClusterer

__all__ = [
    'FinderPatternScanner',
    'MarkerClusterer'
]
