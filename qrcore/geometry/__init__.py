"""Quadrangle estimation and rectification."""

from qrcore.geometry.quadrangle_estimator import QuadrangleEstimator
from qrcore.geometry.perspective_rectifier import PerspectiveRectifier

__all__ = [
    'QuadrangleEstimator',
    'PerspectiveRectifier'
]
