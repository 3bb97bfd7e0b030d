'''
Thread fan-out for many independent digests.

Each md5() call owns its own state, so chunks of the batch can run on worker
threads without coordination; results come back in input order.
'''

import asyncio
from typing import Sequence

from md5engine.md5 import md5


async def waiting(label: str, event: asyncio.Event) -> None:
    '''
    Display a simple, non-blocking progress ticker until the given event is set.

    Parameters:
    -----------
    label : str
        Text label to display next to the animated dots.

    event : asyncio.Event
        Event that, when set, stops the animation.
    '''
    print()
    i = 0
    while not event.is_set():
        dots = '.' * (i % 4)                  # cycles through '', '.', '..', '...'
        print(f'\r {label}{dots:<3}', end = '', flush = True)
        await asyncio.sleep(.5)               # yields back to the event loop
        i += 1
    print('\r', end = '', flush = True)       # clear the line tail when finishing


def _hash_chunk(chunk: Sequence[bytes]) -> list[bytes]:
    return [md5(m) for m in chunk]


async def hash_batch(messages: Sequence[bytes], *, chunk_size: int = 256, label: str | None = None) -> list[bytes]:
    '''
    Hash a batch of messages on worker threads.

    Parameters:
    -----------
    messages : Sequence[bytes]
        Independent inputs.

    chunk_size : int, default 256
        Number of messages handed to each thread task.

    label : str | None
        If given, show a ticker with this label while hashing.

    Returns:
    --------
    list[bytes]
        16-byte digests, in the same order as `messages`.
    '''
    if chunk_size < 1:
        raise ValueError(f'chunk_size must be positive, got {chunk_size}')

    chunks = [messages[i : i + chunk_size] for i in range(0, len(messages), chunk_size)]

    event = asyncio.Event()
    ticker = asyncio.create_task(waiting(label, event)) if label else None
    try:
        results = await asyncio.gather(*(asyncio.to_thread(_hash_chunk, c) for c in chunks))
    finally:
        event.set()
        if ticker is not None:
            await ticker

    return [d for chunk in results for d in chunk]


def hash_batch_sync(messages: Sequence[bytes], *, chunk_size: int = 256, label: str | None = None) -> list[bytes]:
    # blocking entry point for callers without an event loop
    return asyncio.run(hash_batch(messages, chunk_size = chunk_size, label = label))
