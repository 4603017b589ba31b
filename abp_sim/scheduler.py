import heapq

from abp_sim.errors import EmptySchedulerAccess
from abp_sim.events import Timeout, TIE_RANK


class EventScheduler:
    """Pending events ordered by (time, kind, insertion order).

    Timeouts are removed lazily: purge_timeout() only marks them as cancelled
    and they are dropped once they reach the top of the heap. A separate count
    of live timeouts keeps has_timeout() constant-time.
    """

    def __init__(self):
        self.events = []
        self.event_id = 0
        self._live_timeouts = set()
        self._cancelled = set()

    def __len__(self):
        return len(self.events) - len(self._cancelled)

    def schedule_event(self, event):
        self.event_id += 1
        heapq.heappush(self.events, (event.time, TIE_RANK[type(event)], self.event_id, event))
        if isinstance(event, Timeout):
            self._live_timeouts.add(self.event_id)
        return self.event_id

    def register_timeout(self, time_, sequence_number):
        return self.schedule_event(Timeout(time_, sequence_number))

    def is_empty(self):
        return len(self) == 0

    def has_timeout(self):
        return bool(self._live_timeouts)

    def purge_timeout(self):
        purged = len(self._live_timeouts)
        self._cancelled |= self._live_timeouts
        self._live_timeouts = set()
        return purged

    def _drop_cancelled(self):
        while self.events and self.events[0][2] in self._cancelled:
            _, _, eid, _ = heapq.heappop(self.events)
            self._cancelled.discard(eid)

    def peek_event(self):
        self._drop_cancelled()
        if not self.events:
            raise EmptySchedulerAccess("peek_event() on an empty scheduler")
        return self.events[0][3]

    def pop_event(self):
        self._drop_cancelled()
        if not self.events:
            raise EmptySchedulerAccess("pop_event() on an empty scheduler")
        _, _, eid, event = heapq.heappop(self.events)
        self._live_timeouts.discard(eid)
        return event
