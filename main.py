#!/usr/bin/env python3
"""
QR Locator Command Line Entry Point.

Detects and decodes QR codes in image files and prints one JSON line
per image.

Usage:
    python main.py --input samples/
    python main.py --input code.png --eps-x 0.25 --eps-y 0.25
    python main.py --input samples/ --debug --limit 10

Output:
    {"frameId": ..., "detected": true, "text": "...", "polygon": [...], ...}
    When --debug is enabled, straight QR codes and JSON summaries are
    saved to output/debug/qr_detection/.
"""

import sys
import os
import argparse
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import cv2

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from qrservices import ConfigService, QrDetectionService


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Image Loading
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def loadImages(inputPath: str, extensions: Iterable[str]) -> List[Path]:
    """
    Collect image files from a file or directory path.

    Args:
        inputPath: Image file or directory (searched recursively).
        extensions: Accepted file extensions (lowercase, with dot).

    Returns:
        List of image file paths, sorted by name.
    """
    logger = logging.getLogger(__name__)
    path = Path(inputPath)

    if not path.exists():
        logger.error(f"Input path not found: {inputPath}")
        return []

    if path.is_file():
        return [path]

    extensions = {ext.lower() for ext in extensions}
    imageFiles = [
        p for p in path.rglob("*")
        if p.is_file() and p.suffix.lower() in extensions
    ]
    imageFiles = sorted(imageFiles, key=lambda p: str(p).lower())

    logger.info(f"Found {len(imageFiles)} images in {inputPath} (recursive)")
    return imageFiles


def processAll(
    service: QrDetectionService,
    imageFiles: List[Path],
    limit: Optional[int] = None
) -> List[dict]:
    """
    Run QR detection over image files and print one JSON line per image.

    Args:
        service: QR detection service.
        imageFiles: Images to process.
        limit: Maximum number of images to process.

    Returns:
        List of result dictionaries.
    """
    logger = logging.getLogger(__name__)
    if limit is not None:
        imageFiles = imageFiles[:limit]

    results = []
    for imagePath in imageFiles:
        frameId = imagePath.stem
        image = cv2.imread(str(imagePath), cv2.IMREAD_COLOR)
        if image is None:
            logger.error(f"Failed to read image: {imagePath}")
            result = {"frameId": frameId, "success": False, "errorMessage": "unreadable image"}
        else:
            result = service.detectQr(image, frameId).toDict()

        result["path"] = str(imagePath)
        print(json.dumps(result, ensure_ascii=False))
        results.append(result)

    return results


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLI Interface
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def setupLogging(debugMode: bool = False) -> None:
    """
    Setup application logging.

    Log records go to stderr so stdout only carries JSON results.

    Args:
        debugMode: If True, set log level to DEBUG.
    """
    level = logging.DEBUG if debugMode else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def parseArgs(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Detect and decode QR codes in images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --input samples/
  python main.py --input code.png --eps-x 0.25 --eps-y 0.25
  python main.py --input samples/ --debug --limit 10
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        default="samples",
        help="Image file or directory of images (default: samples)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default="config/application_config.json",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--eps-x",
        type=float,
        default=None,
        help="Override horizontal finder-pattern epsilon"
    )

    parser.add_argument(
        "--eps-y",
        type=float,
        default=None,
        help="Override vertical finder-pattern epsilon"
    )

    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of images to process"
    )

    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (saves output to output/debug/)"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 if every image was decoded, 1 otherwise.
    """
    args = parseArgs(argv)

    setupLogging(debugMode=args.debug)
    logger = logging.getLogger(__name__)

    try:
        configService = ConfigService(args.config)
    except RuntimeError as e:
        logger.error(str(e))
        return 1

    if args.debug:
        configService.setDebugEnabled(True)

    service = QrDetectionService.fromConfig(configService)
    if args.eps_x is not None:
        service.setEpsX(args.eps_x)
    if args.eps_y is not None:
        service.setEpsY(args.eps_y)

    try:
        imageFiles = loadImages(args.input, configService.getSupportedExtensions())
        results = processAll(service, imageFiles, limit=args.limit)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    finally:
        service.shutdown()

    if not results:
        return 1

    decodedCount = sum(1 for r in results if r.get("text"))
    logger.info(f"Decoded {decodedCount}/{len(results)} images")
    return 0 if decodedCount == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
