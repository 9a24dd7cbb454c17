"""
Finder Pattern Scanner Module.

Locates QR position markers by their 1:1:3:1:1 dark/light run ratio.
Every row is scanned horizontally; each horizontal match is then
cross-checked along the column through its center.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from qrcore.interfaces.finder_scanner_interface import FinderHit, IFinderScanner
from qrcore.qr.qr_image_preprocessor import QrImagePreprocessor


# Run ratio of a line through the center of a position marker
FINDER_RATIO = np.array([1.0, 1.0, 3.0, 1.0, 1.0])
FINDER_MODULES = float(FINDER_RATIO.sum())

# (starts, lengths, isDark) of the runs along one line
Runs = Tuple[np.ndarray, np.ndarray, np.ndarray]


def runLengths(line: np.ndarray) -> Runs:
    """
    Split a boolean line into runs of equal values.

    Args:
        line: 1D boolean array (True = dark).

    Returns:
        Tuple of run start indices, run lengths and run colors.
    """
    changes = np.flatnonzero(line[1:] != line[:-1]) + 1
    starts = np.concatenate(([0], changes))
    ends = np.concatenate((changes, [line.size]))
    return starts, ends - starts, line[starts]


def ratioDeviation(windows: np.ndarray) -> np.ndarray:
    """
    Worst fractional deviation of 5-run windows from 1:1:3:1:1.

    With module = total / 7, run k deviates by |len_k - r_k*module| / (r_k*module).

    Args:
        windows: (N, 5) or (5,) array of run lengths.

    Returns:
        (N,) array of deviations; a window matches epsilon when <= epsilon.
    """
    windows = np.atleast_2d(windows).astype(np.float64)
    module = windows.sum(axis=1, keepdims=True) / FINDER_MODULES
    expected = module * FINDER_RATIO
    return np.max(np.abs(windows - expected) / expected, axis=1)


def measureAcross(
    runs: Runs,
    position: int,
    eps: float
) -> Optional[Tuple[float, float, float]]:
    """
    Measure the finder pattern crossing a line at a given pixel.

    The pixel must lie in a dark run with two full runs on each side.

    Args:
        runs: Runs of the line.
        position: Pixel index on the line inside the central run.
        eps: Fractional ratio tolerance.

    Returns:
        (center, moduleSize, deviation) or None if no pattern matches.
    """
    starts, lengths, isDark = runs
    k = int(np.searchsorted(starts, position, side="right")) - 1
    if k < 2 or k + 2 >= lengths.size or not isDark[k]:
        return None

    window = lengths[k - 2:k + 3]
    deviation = float(ratioDeviation(window)[0])
    if deviation > eps:
        return None

    total = float(window.sum())
    return float(starts[k - 2]) + total / 2.0, total / FINDER_MODULES, deviation


class FinderPatternScanner(IFinderScanner):
    """
    Row/column run-length scanner for QR position markers.

    A horizontal match is promoted to a FinderHit only when the column
    through it also shows the pattern and both passes agree on the
    center within one module. Hits are not merged; the clusterer groups them.
    """

    # Smallest marker: 7 modules of 1 pixel
    MIN_IMAGE_SIZE = 7

    def __init__(
        self,
        preprocessor: Optional[QrImagePreprocessor] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize FinderPatternScanner.

        Args:
            preprocessor: Binarizer for the input image (default: minimal mode).
            logger: Logger instance for debug output.
        """
        self._preprocessor = preprocessor or QrImagePreprocessor()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def preprocessor(self) -> QrImagePreprocessor:
        return self._preprocessor

    def scan(
        self,
        image: np.ndarray,
        epsX: float,
        epsY: float
    ) -> Iterator[FinderHit]:
        """
        Scan an image for finder patterns.

        Args:
            image: Input image (BGR or grayscale)
            epsX: Fractional ratio tolerance of the horizontal pass
            epsY: Fractional ratio tolerance of the vertical pass

        Yields:
            FinderHit for every corroborated candidate, in row order
        """
        height, width = image.shape[:2]
        if height < self.MIN_IMAGE_SIZE or width < self.MIN_IMAGE_SIZE:
            self._logger.debug(f"Image {width}x{height} too small for a finder pattern")
            return

        dark = self._preprocessor.binarize(image)
        columnRuns: Dict[int, Runs] = {}
        hitCount = 0

        for row in range(height):
            starts, lengths, isDark = runLengths(dark[row])
            if lengths.size < 5:
                continue

            windows = sliding_window_view(lengths, 5)
            deviations = ratioDeviation(windows)
            matches = np.flatnonzero((deviations <= epsX) & isDark[:-4])

            for i in matches:
                hit = self._crossCheck(
                    dark, row, starts, lengths, int(i),
                    float(deviations[i]), epsX, epsY, columnRuns
                )
                if hit is not None:
                    hitCount += 1
                    yield hit

        self._logger.debug(
            f"Scan finished: {hitCount} finder hits (epsX={epsX}, epsY={epsY})"
        )

    def _crossCheck(
        self,
        dark: np.ndarray,
        row: int,
        starts: np.ndarray,
        lengths: np.ndarray,
        index: int,
        deviationX: float,
        epsX: float,
        epsY: float,
        columnRuns: Dict[int, Runs]
    ) -> Optional[FinderHit]:
        """
        Confirm a horizontal match vertically and refine its center.

        Args:
            dark: Binarized image.
            row: Row of the horizontal match.
            starts: Run starts of the row.
            lengths: Run lengths of the row.
            index: Index of the first run of the match.
            deviationX: Ratio deviation of the horizontal match.
            epsX: Horizontal tolerance.
            epsY: Vertical tolerance.
            columnRuns: Per-call cache of column runs.

        Returns:
            FinderHit, or None if the vertical pass disagrees.
        """
        total = float(lengths[index:index + 5].sum())
        moduleX = total / FINDER_MODULES
        centerX = float(starts[index]) + total / 2.0
        column = int(starts[index + 2] + lengths[index + 2] // 2)

        if column not in columnRuns:
            columnRuns[column] = runLengths(dark[:, column])

        vertical = measureAcross(columnRuns[column], row, epsY)
        if vertical is None:
            return None

        centerY, moduleY, deviationY = vertical
        if abs(centerY - (row + 0.5)) > moduleX:
            return None

        # Re-measure the row through the vertical center
        refineRow = min(int(centerY), dark.shape[0] - 1)
        horizontal = measureAcross(runLengths(dark[refineRow]), column, epsX)
        if horizontal is not None and abs(horizontal[0] - centerX) <= moduleX:
            centerX, moduleX, deviationX = horizontal

        return FinderHit(
            center=(centerX, centerY),
            moduleSize=(moduleX + moduleY) / 2.0,
            confidence=max(0.0, 1.0 - max(deviationX, deviationY)),
            row=row
        )
