"""
Unit Tests for the gateway event watcher entry point
"""

import base64
import json
import pytest

from dappchain.proto import TransferGatewayContractMappingConfirmed
from gateway import GatewayEventStream, TokenKind
from gateway.events import TOKEN_WITHDRAWAL_SIGNED_TOPIC, CONTRACT_MAPPING_CONFIRMED_TOPIC
from main import GatewayEventWatcher, main


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


@pytest.fixture
def withdrawal_line(withdrawal_event_data, owner, foreign_contract, validator_sigs):
    data = withdrawal_event_data(TokenKind.ERC20, owner, token_contract=foreign_contract,
                                 token_amount=42, sigs=validator_sigs)
    return json.dumps({'topics': [TOKEN_WITHDRAWAL_SIGNED_TOPIC], 'data': b64(data)})


@pytest.fixture
def mapping_line(foreign_contract, token_contract):
    message = TransferGatewayContractMappingConfirmed()
    message.foreign_contract.CopyFrom(foreign_contract.marshal_pb())
    message.local_contract.CopyFrom(token_contract.marshal_pb())
    return json.dumps({'topic': CONTRACT_MAPPING_CONFIRMED_TOPIC, 'data': b64(message.SerializeToString())})


@pytest.fixture
def mixed_batch(withdrawal_line, mapping_line):
    return [
        withdrawal_line + '\n',
        '{not json\n',
        # undecodable protobuf
        json.dumps({'topic': TOKEN_WITHDRAWAL_SIGNED_TOPIC, 'data': b64(b'\xff\xff\xff')}),
        # decodes, but the owner address is empty
        json.dumps({'topic': TOKEN_WITHDRAWAL_SIGNED_TOPIC, 'data': ''}),
        json.dumps({'topic': 'event:Transfer', 'data': ''}),
        '\n',
        mapping_line,
    ]


class TestGatewayEventWatcher:

    def test_feed_skips_bad_lines(self, mixed_batch):
        watcher = GatewayEventWatcher(GatewayEventStream())

        watcher.feed(mixed_batch)

        assert watcher.stats['lines'] == 6
        assert watcher.stats['failed'] == 3
        assert watcher.stats['ignored'] == 1
        assert watcher.subscription.queue.qsize() == 2

    @pytest.mark.asyncio
    async def test_drain_counts_delivered_events(self, mixed_batch):
        watcher = GatewayEventWatcher(GatewayEventStream())
        watcher.feed(mixed_batch)

        await watcher.drain()

        assert watcher.stats['withdrawals'] == 1
        assert watcher.stats['mappings'] == 1
        assert watcher.subscription.queue.empty()

    @pytest.mark.asyncio
    async def test_drain_newer_token_kind(self, withdrawal_event_data, owner, token_contract):
        data = withdrawal_event_data(4, owner, token_contract=token_contract, token_amount=5)
        watcher = GatewayEventWatcher(GatewayEventStream())
        watcher.feed([json.dumps({'topic': TOKEN_WITHDRAWAL_SIGNED_TOPIC, 'data': b64(data)})])

        await watcher.drain()

        assert watcher.stats['withdrawals'] == 1
        assert watcher.stats['failed'] == 0


class TestMain:

    @pytest.mark.asyncio
    async def test_reads_file(self, tmp_path, mixed_batch):
        path = tmp_path / 'events.jsonl'
        path.write_text('\n'.join(line.rstrip('\n') for line in mixed_batch))

        stats = await main(str(path))

        assert stats['withdrawals'] == 1
        assert stats['mappings'] == 1
        assert stats['failed'] == 3
