"""Symbol decoder backends."""

from qrcore.decoder.symbol_decoder_factory import (
    createSymbolDecoder,
    getSupportedDecoderBackends,
    isDecoderBackendAvailable
)

__all__ = [
    'createSymbolDecoder',
    'getSupportedDecoderBackends',
    'isDecoderBackendAvailable'
]
