"""
Gateway Event Watcher - Main Entry Point
Replays a JSON-lines feed of raw contract events through the gateway
event stream and logs the decoded withdrawals and contract mappings.

Usage: python main.py events.jsonl   (reads stdin when no path is given)
"""

import asyncio
import json
import sys
from loguru import logger

from gateway import ContractEvent, GatewayEventStream, TokenWithdrawalSigned, ContractMappingConfirmed, kind_name
from utils import Settings, configure_logging


class GatewayEventWatcher:
    """Feeds raw events into a GatewayEventStream and reports what comes out"""

    def __init__(self, stream: GatewayEventStream):
        self.stream = stream
        self.subscription = stream.subscribe(TokenWithdrawalSigned, ContractMappingConfirmed)
        self.stats = {'lines': 0, 'withdrawals': 0, 'mappings': 0, 'ignored': 0, 'failed': 0}

    def feed(self, lines):
        for line in lines:
            line = line.strip()
            if not line:
                continue
            self.stats['lines'] += 1
            try:
                event = ContractEvent.from_dict(json.loads(line))
                if self.stream.publish(event) is None:
                    self.stats['ignored'] += 1
            except Exception as e:
                self.stats['failed'] += 1
                logger.error(f"Error processing event line {self.stats['lines']}: {e}")

    async def drain(self):
        while not self.subscription.queue.empty():
            event = await self.subscription.get()
            if isinstance(event, TokenWithdrawalSigned):
                self.stats['withdrawals'] += 1
                logger.info(
                    f"Withdrawal signed: owner={event.token_owner} kind={kind_name(event.token_kind)} "
                    f"id={event.token_id} amount={event.token_amount} sigs={len(event.sigs)}"
                )
            else:
                self.stats['mappings'] += 1
                logger.info(f"Contract mapping confirmed: {event.foreign_contract} -> {event.local_contract}")


async def main(path=None):
    """Main entry point"""
    watcher = GatewayEventWatcher(GatewayEventStream())

    if path:
        with open(path, 'r') as f:
            watcher.feed(f)
    else:
        watcher.feed(sys.stdin)

    await watcher.drain()

    logger.info(
        f"Processed {watcher.stats['lines']} events: {watcher.stats['withdrawals']} withdrawals, "
        f"{watcher.stats['mappings']} mappings, {watcher.stats['ignored']} ignored, {watcher.stats['failed']} failed"
    )
    watcher.subscription.close()
    return watcher.stats


if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_file)

    try:
        asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error in main: {e}")
        sys.exit(1)
