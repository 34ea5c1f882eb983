"""
Tx Middleware Package
Handlers applied to every outgoing transaction
"""

from .nonce_tx import NonceTxMiddleware, is_sequence_mismatch, SEQUENCE_MISMATCH_MARKER

__all__ = ['NonceTxMiddleware', 'is_sequence_mismatch', 'SEQUENCE_MISMATCH_MARKER']
