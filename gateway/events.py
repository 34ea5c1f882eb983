"""
Gateway Events
Decodes raw contract events once and fans typed events out to subscribers
"""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Type, Union
from loguru import logger

from .receipts import (
    TokenWithdrawalSigned,
    ContractMappingConfirmed,
    decode_token_withdrawal_signed,
    decode_contract_mapping_confirmed,
)

TOKEN_WITHDRAWAL_SIGNED_TOPIC = 'event:TokenWithdrawalSigned'
CONTRACT_MAPPING_CONFIRMED_TOPIC = 'event:ContractMappingConfirmed'

GatewayEvent = Union[TokenWithdrawalSigned, ContractMappingConfirmed]

_DECODERS = {
    TOKEN_WITHDRAWAL_SIGNED_TOPIC: decode_token_withdrawal_signed,
    CONTRACT_MAPPING_CONFIRMED_TOPIC: decode_contract_mapping_confirmed,
}


@dataclass(frozen=True)
class ContractEvent:
    """Raw event emitted by a contract, data is base64 encoded"""

    topics: Tuple[str, ...]
    data: str
    contract: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict) -> 'ContractEvent':
        topics = raw.get('topics')
        if topics is None and raw.get('topic'):
            topics = [raw['topic']]
        return cls(topics=tuple(topics or ()), data=raw.get('data', ''),
                   contract=raw.get('contract'))

    @property
    def topic(self) -> Optional[str]:
        return self.topics[0] if self.topics else None


def decode_gateway_event(event: ContractEvent) -> Optional[GatewayEvent]:
    """
    Decode a raw contract event into a typed gateway event

    Args:
        event: Raw contract event

    Returns:
        Typed event, or None if the topic is not a gateway event
    """
    decoder = _DECODERS.get(event.topic)
    if decoder is None:
        return None
    return decoder(event.data)


@dataclass(eq=False)
class Subscription:
    """
    Queue of decoded gateway events for one consumer

    With maxsize 0 the queue is unbounded and a slow consumer holds every
    event published since it subscribed. With a positive maxsize the oldest
    queued event is dropped to make room, counted in dropped.
    """

    stream: 'GatewayEventStream'
    event_types: Tuple[Type, ...] = ()
    maxsize: int = 0
    queue: asyncio.Queue = field(init=False)
    dropped: int = field(default=0, init=False)

    def __post_init__(self):
        self.queue = asyncio.Queue(self.maxsize)

    def accepts(self, event: GatewayEvent) -> bool:
        return not self.event_types or isinstance(event, self.event_types)

    async def get(self) -> GatewayEvent:
        return await self.queue.get()

    def put(self, event: GatewayEvent):
        if self.queue.full():
            self.queue.get_nowait()
            self.dropped += 1
            logger.warning(f"Subscriber queue full, dropped oldest event ({self.dropped} so far)")
        self.queue.put_nowait(event)

    def close(self):
        self.stream.unsubscribe(self)

    def __aiter__(self):
        return self

    async def __anext__(self) -> GatewayEvent:
        return await self.queue.get()


class GatewayEventStream:
    """
    Typed event stream for a transfer gateway contract

    Each raw event is decoded once in publish() and delivered to every
    matching subscriber in publish order.
    """

    def __init__(self):
        self.subscriptions: List[Subscription] = []

    def subscribe(self, *event_types: Type, maxsize: int = 0) -> Subscription:
        """
        Subscribe to decoded events

        Args:
            event_types: Event classes to receive; all gateway events if empty
            maxsize: Queue bound, 0 for unbounded. When full the oldest event is dropped

        Returns:
            Subscription to read events from
        """
        subscription = Subscription(self, tuple(event_types), maxsize)
        self.subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription):
        if subscription in self.subscriptions:
            self.subscriptions.remove(subscription)

    def publish(self, event: ContractEvent) -> Optional[GatewayEvent]:
        """
        Decode a raw contract event and deliver it

        Args:
            event: Raw contract event

        Returns:
            Decoded event, or None if it was not a gateway event
        """
        decoded = decode_gateway_event(event)
        if decoded is None:
            logger.debug(f"Ignoring event with topics {event.topics}")
            return None

        for subscription in self.subscriptions:
            if subscription.accepts(decoded):
                subscription.put(decoded)

        logger.debug(f"Published {type(decoded).__name__}")
        return decoded
