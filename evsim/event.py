# FILE INFO ###################################################
# Created on October 18, 2026
###############################################################

"""Simulation events and the event list."""

import heapq, itertools

__all__ = ["Event", "infinite_time", "minus_infinite_time"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# two extremes of simulation time
infinite_time = float('inf')
minus_infinite_time = float('-inf')

# creation order of all events; used as the identity key of an event
_event_ids = itertools.count(1)

class Event(object):
    """A one-time occurrence in simulated time.

    An event starts "pending" when it's created. It becomes
    "triggered" when someone calls trigger(), at which point it is
    put on the event list to be processed at the current simulation
    time. When the simulator pulls the event from the event list, the
    event becomes "processed": all processes waiting on the event are
    resumed (in the order they started waiting) and all callbacks
    attached to the event are invoked (in the order they were added).

    A pending event can be aborted instead, in which case the
    processes waiting on the event are destroyed; they never resume.
    Processed and aborted are final states. A triggered event can no
    longer be aborted.

    Events are compared and hashed by identity; the 'id' attribute is
    a unique number given to the event in the order of creation, which
    can be used as a stable key for the event.

    """

    # an event is in one of the four states
    PENDING     = 0
    TRIGGERED   = 1
    PROCESSED   = 2
    ABORTED     = 3

    _state_names = ('pending', 'triggered', 'processed', 'aborted')

    def __init__(self, sim, name=None):
        """An event is created against a simulator, usually using
        simulator's event() or timeout() function; an event can have
        an optional name."""

        from .simulator import simulator
        if not isinstance(sim, simulator):
            errmsg = "Event(sim=%r) not a simulator" % sim
            log.error(errmsg)
            raise TypeError(errmsg)

        self._sim = sim
        self.id = next(_event_ids)
        self.name = name
        self._state = Event.PENDING
        self._value = None
        self._waiters = []
        self._callbacks = []

    def __str__(self):
        return "evt=%s (%s)" % (self.name if self.name else self.id,
                                Event._state_names[self._state])

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__, self)

    @property
    def sim(self):
        """The simulator on which the event is scheduled."""
        return self._sim

    @property
    def value(self):
        """The value carried by the event. It's set when the event is
        triggered; a timeout carries its value from the time it's
        created. Otherwise it's None."""
        return self._value

    def pending(self):
        """Return whether the event is neither triggered nor aborted."""
        return self._state == Event.PENDING

    def triggered(self):
        """Return whether the event is triggered or processed."""
        return self._state == Event.TRIGGERED or self._state == Event.PROCESSED

    def processed(self):
        """Return whether the event has been processed."""
        return self._state == Event.PROCESSED

    def aborted(self):
        """Return whether the event has been aborted."""
        return self._state == Event.ABORTED

    def trigger(self, value=None):
        """Trigger the event so that it will be processed at the current
        simulation time.

        The event will carry the given value, which is also what the
        processes waiting on the event get when they resume. If the
        event is not pending, this method does nothing.

        """

        if self._state != Event.PENDING:
            return
        self._value = value
        self._sim.schedule(self)
        self._state = Event.TRIGGERED

    def abort(self):
        """Abort the event.

        All processes currently waiting on the event are destroyed and
        all callbacks are dropped. If the event is not pending, this
        method does nothing.

        """

        if self._state != Event.PENDING:
            return

        self._state = Event.ABORTED
        self._sim._runtime["aborted_events"] += 1
        log.debug("[%g] simulator '%s' abort %s" % (self._sim.now, self._sim.name, self))

        waiters, self._waiters = self._waiters, []
        self._callbacks = []
        for p in waiters:
            if p.pending():
                p.abort()
            else:
                # the process's own event was triggered from outside;
                # the body still has to be unwound
                p._destroy()

    def add_callback(self, func):
        """Add a function to be called with the event as its only argument
        when the event is processed. It has no effect if the event is
        already processed or aborted."""

        if self._state == Event.PROCESSED or self._state == Event.ABORTED:
            return
        self._callbacks.append(func)

    def wait(self):
        """The current process waits on this event; it returns the event's
        value once the event has been processed."""
        return self._sim.wait(self)

    def __or__(self, other):
        return self._sim.any_of([self, other])

    def __and__(self, other):
        return self._sim.all_of([self, other])

    def _add_waiter(self, p):
        """Record the process to be resumed when the event is processed;
        the event must be pending or triggered."""
        assert self._state == Event.PENDING or self._state == Event.TRIGGERED
        self._waiters.append(p)

    def _remove_waiter(self, p):
        # the event may have already let go of its waiters
        if p in self._waiters:
            self._waiters.remove(p)

    def _process(self):
        """Mark the event as processed, resume the waiting processes, and
        call the callbacks. This is called by the simulator's main loop
        only."""

        if self._state == Event.PROCESSED or self._state == Event.ABORTED:
            return

        self._state = Event.PROCESSED

        # a resumed process may run up to its next wait, which may in
        # turn abort or trigger other events; the lists are detached
        # first so that they are consumed exactly once
        waiters, self._waiters = self._waiters, []
        for p in waiters:
            p._resume()

        callbacks, self._callbacks = self._callbacks, []
        for func in callbacks:
            func(self)

class _EventList_(object):
    """An event list sorts events in timestamp order.

    An event list is a priority queue of (time, sequence, event)
    entries. The sequence is a counter incremented each time an event
    is inserted; events with the same timestamp are therefore
    retrieved in the order they were inserted. It supports three basic
    operations: to insert a (future) event, to peek and to retrieve
    the event with the minimal timestamp.

    """

    def __init__(self, init_time=minus_infinite_time):
        self.pqueue = []
        self.last = init_time
        self._seq = itertools.count()

    def __len__(self):
        return len(self.pqueue)

    def insert(self, evt, time):
        if self.last <= time:
            heapq.heappush(self.pqueue, (time, next(self._seq), evt))
        else:
            raise ValueError("EventList.insert(%s): past event (time=%g, last=%g)" %
                             (evt, time, self.last))

    def get_min(self):
        if len(self.pqueue) > 0:
            return self.pqueue[0][0] # just return the time
        else:
            raise IndexError("EventList.get_min() from empty list")

    def delete_min(self):
        if len(self.pqueue) > 0:
            time, _, evt = heapq.heappop(self.pqueue)
            assert self.last <= time
            self.last = time
            return time, evt
        else:
            raise IndexError("EventList.delete_min() from empty list")

    def entries(self):
        """Return all (time, sequence, event) entries in order."""
        return sorted(self.pqueue, key=lambda x: x[:2])
