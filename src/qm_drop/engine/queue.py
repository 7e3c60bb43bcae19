"""FIFO waitlist helpers. Queues are tuples; every helper returns a new one."""


def enqueue(queue: tuple[str, ...], actor_id: str) -> tuple[str, ...]:
    """Append actor at the tail unless already waiting."""
    if actor_id in queue:
        return queue
    return (*queue, actor_id)


def dequeue(queue: tuple[str, ...], actor_id: str) -> tuple[str, ...]:
    return tuple(a for a in queue if a != actor_id)


def position(queue: tuple[str, ...], actor_id: str) -> int:
    """1-based position; actor must be in the queue."""
    return queue.index(actor_id) + 1
