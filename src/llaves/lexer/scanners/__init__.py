"""Mode-specific scanners for the llaves lexer.

Each scanner handles one LexerMode: BLOCK classifies lines, CODE_FENCE
passes lines through until the closing fence.
"""

from llaves.lexer.scanners.block import BlockScannerMixin
from llaves.lexer.scanners.fence import FenceScannerMixin

__all__ = ["BlockScannerMixin", "FenceScannerMixin"]
