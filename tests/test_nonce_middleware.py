"""
Unit Tests for the Nonce Tx Middleware and commit pipeline
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, Mock

from dappchain import TxResults, TxStageResult, InvalidTxNonceError, TransportError
from dappchain import commit_tx, is_invalid_tx_nonce_error
from dappchain.proto import NonceTx
from middleware import NonceTxMiddleware, is_sequence_mismatch, SEQUENCE_MISMATCH_MARKER

FROM_ADDRESS = '0x' + '11' * 20


@pytest.fixture
def client():
    """Chain state reader with last committed nonce 41"""
    reader = Mock()
    reader.get_nonce = AsyncMock(return_value=41)
    return reader


@pytest.fixture
def middleware(client):
    return NonceTxMiddleware(FROM_ADDRESS, client)


def parse_nonce_tx(envelope: bytes):
    tx = NonceTx()
    tx.ParseFromString(envelope)
    return tx


class TestWrap:
    """Test sequence number attachment"""

    @pytest.mark.asyncio
    async def test_attaches_next_nonce(self, middleware, client):
        """Current nonce 41 gives sequence 42"""
        envelope = await middleware.wrap(b'payload')

        tx = parse_nonce_tx(envelope)
        assert tx.sequence == 42
        assert tx.inner == b'payload'
        client.get_nonce.assert_awaited_once_with('eth', FROM_ADDRESS)

    @pytest.mark.asyncio
    async def test_reads_nonce_every_call(self, middleware, client):
        """No caching between calls"""
        client.get_nonce.side_effect = [5, 6]

        first = parse_nonce_tx(await middleware.wrap(b'a'))
        second = parse_nonce_tx(await middleware.wrap(b'b'))

        assert (first.sequence, second.sequence) == (6, 7)
        assert client.get_nonce.await_count == 2

    @pytest.mark.asyncio
    async def test_custom_namespace(self, client):
        middleware = NonceTxMiddleware(FROM_ADDRESS, client, namespace='default')
        await middleware.wrap(b'')
        client.get_nonce.assert_awaited_once_with('default', FROM_ADDRESS)

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(self, middleware, client):
        client.get_nonce.side_effect = TransportError('connection refused')

        with pytest.raises(TransportError):
            await middleware.wrap(b'payload')

    @pytest.mark.asyncio
    async def test_concurrent_wraps_race(self, middleware):
        """Overlapping calls for one account read the same nonce"""
        first, second = await asyncio.gather(middleware.wrap(b"a"), middleware.wrap(b"b"))
        assert parse_nonce_tx(first).sequence == parse_nonce_tx(second).sequence == 42


class TestInterpret:
    """Test replay-nonce classification of tx results"""

    def test_marker_literal(self):
        assert SEQUENCE_MISMATCH_MARKER == 'sequence number does not match'

    def test_commit_mismatch_raises(self, middleware):
        results = TxResults(commit=TxStageResult(1, 'tx failed: sequence number does not match, got 3'))

        with pytest.raises(InvalidTxNonceError) as exc_info:
            middleware.interpret(results)

        assert is_invalid_tx_nonce_error(exc_info.value)
        assert str(exc_info.value) == 'Invalid tx nonce'

    def test_validation_mismatch_raises(self, middleware):
        results = TxResults(
            validation=TxStageResult(1, 'sequence number does not match'),
            commit=None
        )
        with pytest.raises(InvalidTxNonceError):
            middleware.interpret(results)

    def test_other_failure_passes_through(self, middleware):
        results = TxResults(
            validation=TxStageResult(0),
            commit=TxStageResult(1, 'insufficient balance')
        )
        assert middleware.interpret(results) is results

    def test_success_with_marker_text_passes(self, middleware):
        """Marker text alone is not a failure"""
        results = TxResults(commit=TxStageResult(0, 'sequence number does not match'))
        assert middleware.interpret(results) is results

    def test_non_one_failure_code(self, middleware):
        results = TxResults(validation=TxStageResult(7, 'sequence number does not match'))
        with pytest.raises(InvalidTxNonceError):
            middleware.interpret(results)

    def test_empty_results(self, middleware):
        results = TxResults()
        assert middleware.interpret(results) is results

    def test_is_sequence_mismatch(self):
        assert not is_sequence_mismatch(None)
        assert not is_sequence_mismatch(TxStageResult(1, ''))
        assert is_sequence_mismatch(TxStageResult(1, 'sequence number does not match'))

    def test_results_from_dict(self, middleware):
        results = TxResults.from_dict({'commit': {'code': 1, 'log': 'sequence number does not match'}})

        assert results.validation is None
        assert results.commit == TxStageResult(1, 'sequence number does not match')
        with pytest.raises(InvalidTxNonceError):
            middleware.interpret(results)


class TestCommitTx:
    """Test middleware chain around the transport"""

    @pytest.mark.asyncio
    async def test_wraps_sends_and_interprets(self, middleware):
        ok = TxResults(validation=TxStageResult(0), commit=TxStageResult(0))
        transport = Mock()
        transport.send_tx = AsyncMock(return_value=ok)

        results = await commit_tx(b'call', [middleware], transport)

        assert results is ok
        sent = transport.send_tx.await_args.args[0]
        assert parse_nonce_tx(sent).inner == b'call'

    @pytest.mark.asyncio
    async def test_mismatch_surfaces_to_caller(self, middleware):
        transport = Mock()
        transport.send_tx = AsyncMock(return_value=TxResults(
            validation=TxStageResult(1, 'sequence number does not match')
        ))

        with pytest.raises(InvalidTxNonceError):
            await commit_tx(b'call', [middleware], transport)

    @pytest.mark.asyncio
    async def test_middleware_order(self):
        calls = []

        class Recorder:
            def __init__(self, name):
                self.name = name

            async def wrap(self, payload):
                calls.append(('wrap', self.name))
                return payload + self.name.encode()

            def interpret(self, results):
                calls.append(('interpret', self.name))
                return results

        transport = Mock()
        transport.send_tx = AsyncMock(return_value=TxResults())

        await commit_tx(b'', [Recorder('a'), Recorder('b')], transport)

        transport.send_tx.assert_awaited_once_with(b'ab')
        assert calls == [('wrap', 'a'), ('wrap', 'b'), ('interpret', 'b'), ('interpret', 'a')]
