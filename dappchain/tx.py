"""
Transaction Pipeline
Runs a payload through the tx middleware chain and the transport
"""

from typing import Sequence
from loguru import logger

from .client import TxMiddleware, TxResults, TxTransport


async def commit_tx(payload: bytes, middleware: Sequence[TxMiddleware], transport: TxTransport) -> TxResults:
    """
    Wrap, send and interpret a transaction

    Middleware wraps in order (innermost first) and interprets results in
    reverse order. Nothing here retries; errors reach the caller as raised.

    Args:
        payload: Serialized transaction payload
        middleware: Middleware chain
        transport: Transport that submits the final envelope

    Returns:
        Results after every middleware has inspected them
    """
    envelope = payload
    for handler in middleware:
        envelope = await handler.wrap(envelope)

    results = await transport.send_tx(envelope)
    logger.debug(f"Tx results: {results}")

    for handler in reversed(middleware):
        results = handler.interpret(results)

    return results
