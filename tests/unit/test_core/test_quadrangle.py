"""Unit tests for the Quadrangle value type and QuadrangleEstimator."""
import math
from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from qrcore.exceptions import InvalidArgumentError
from qrcore.geometry.quadrangle_estimator import QuadrangleEstimator, estimateDimension
from qrcore.interfaces.finder_scanner_interface import FinderHit
from qrcore.interfaces.marker_clusterer_interface import MarkerTriple
from qrcore.interfaces.quadrangle_estimator_interface import Quadrangle


SQUARE = [(45.0, 45.0), (255.0, 45.0), (255.0, 255.0), (45.0, 255.0)]


def makeTriple(topLeft, topRight, bottomLeft, moduleSize=10.0):
    return MarkerTriple(
        topLeft=FinderHit(topLeft, moduleSize, 1.0),
        topRight=FinderHit(topRight, moduleSize, 1.0),
        bottomLeft=FinderHit(bottomLeft, moduleSize, 1.0)
    )


class TestQuadrangle:
    """Test suite for Quadrangle conversions and geometry."""

    @pytest.mark.parametrize("layout", [
        np.array(SQUARE),
        np.array(SQUARE, dtype=np.float32).reshape(1, 4, 2),
        np.array(SQUARE).reshape(8),
        SQUARE,
    ])
    def test_from_array_layouts(self, layout):
        quadrangle = Quadrangle.fromArray(layout)
        assert quadrangle.points == tuple(SQUARE)

    def test_from_array_returns_same_quadrangle(self):
        quadrangle = Quadrangle.fromArray(SQUARE)
        assert Quadrangle.fromArray(quadrangle) is quadrangle

    def test_to_array(self):
        arr = Quadrangle.fromArray(SQUARE).toArray()
        assert arr.shape == (4, 2)
        assert arr.dtype == np.float32

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Quadrangle.fromArray(None)

    def test_wrong_point_count_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Quadrangle.fromArray(SQUARE[:3])

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Quadrangle.fromArray([("a", "b")] * 4)

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Quadrangle.fromArray([(0, 0), (1, 0), (1, math.nan), (0, 1)])

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            Quadrangle.fromArray(None)

    def test_immutability(self):
        quadrangle = Quadrangle.fromArray(SQUARE)
        with pytest.raises(FrozenInstanceError):
            quadrangle.points = ()

    def test_clockwise_area_is_positive(self):
        quadrangle = Quadrangle.fromArray(SQUARE)
        assert quadrangle.signedArea == pytest.approx(210.0 * 210.0)
        reversed_ = Quadrangle.fromArray(SQUARE[::-1])
        assert reversed_.signedArea == pytest.approx(-210.0 * 210.0)
        assert reversed_.area == pytest.approx(210.0 * 210.0)

    def test_convexity(self):
        assert Quadrangle.fromArray(SQUARE).isConvex()
        bowtie = [SQUARE[0], SQUARE[2], SQUARE[1], SQUARE[3]]
        assert not Quadrangle.fromArray(bowtie).isConvex()

    def test_bounding_rect(self):
        quadrangle = Quadrangle.fromArray([(10.2, 5.7), (30.0, 6.0), (29.5, 25.1), (9.9, 24.0)])
        assert quadrangle.boundingRect() == (9, 5, 21, 21)


class TestEstimateDimension:
    """Test suite for symbol size estimation."""

    @pytest.mark.parametrize("leg, module, expected", [
        (140.0, 10.0, 21),
        (180.0, 10.0, 25),
        (143.0, 10.0, 21),   # snaps to the nearest version
        (55.0, 5.0, 21),     # smaller than version 1
        (5000.0, 10.0, 177),
        (140.0, 0.0, 21),
    ])
    def test_dimension(self, leg, module, expected):
        assert estimateDimension(leg, module) == expected


class TestQuadrangleEstimator:
    """Test suite for QuadrangleEstimator.estimate."""

    def test_upright_code(self):
        quadrangle = QuadrangleEstimator().estimate(makeTriple((80, 80), (220, 80), (80, 220)))
        assert quadrangle is not None
        assert np.allclose(quadrangle.points, SQUARE)

    def test_order_is_clockwise_from_top_left(self):
        quadrangle = QuadrangleEstimator().estimate(makeTriple((80, 80), (220, 80), (80, 220)))
        assert quadrangle.signedArea > 0
        assert quadrangle.points[0] == pytest.approx((45.0, 45.0))

    def test_rotated_code(self):
        angle = math.radians(30)
        rotation = np.array([[math.cos(angle), -math.sin(angle)],
                             [math.sin(angle), math.cos(angle)]])
        origin = np.array([150.0, 150.0])

        def turn(point):
            return tuple(rotation @ (np.array(point) - origin) + origin)

        # Scan-axis chords of a 30 degree marker are 1/cos(30) longer
        triple = makeTriple(
            turn((80, 80)), turn((220, 80)), turn((80, 220)),
            moduleSize=10.0 / math.cos(angle)
        )
        quadrangle = QuadrangleEstimator().estimate(triple)
        expected = [turn(p) for p in SQUARE]
        assert np.allclose(quadrangle.points, expected, atol=1e-6)

    def test_larger_version(self):
        # Version 2: 25 modules, markers 18 modules apart
        quadrangle = QuadrangleEstimator().estimate(makeTriple((35, 35), (215, 35), (35, 215)))
        assert np.allclose(quadrangle.points, [(0, 0), (250, 0), (250, 250), (0, 250)])

    def test_coincident_markers(self):
        assert QuadrangleEstimator().estimate(makeTriple((80, 80), (80, 80), (80, 220))) is None

    def test_collinear_markers(self):
        assert QuadrangleEstimator().estimate(makeTriple((80, 80), (220, 80), (360, 80))) is None

    def test_counter_clockwise_triple(self):
        assert QuadrangleEstimator().estimate(makeTriple((80, 80), (80, 220), (220, 80))) is None

    def test_min_area(self):
        estimator = QuadrangleEstimator(minArea=1e6)
        assert estimator.estimate(makeTriple((80, 80), (220, 80), (80, 220))) is None
