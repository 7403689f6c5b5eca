# FILE INFO ###################################################
# Created on October 18, 2026
###############################################################

"""Events derived from a set of other events."""

from .event import Event

__all__ = ["any_of", "all_of"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

def _distinct(sim, events, caller):
    """Return the events without duplicates (kept in their first-seen
    order), making sure they are all events of the given simulator."""

    distinct = {}
    for e in events:
        if not isinstance(e, Event):
            errmsg = "%s() expects events, but %r is not" % (caller, e)
            log.error(errmsg)
            raise TypeError(errmsg)
        if e.sim is not sim:
            errmsg = "%s() %s belongs to simulator '%s', not '%s'" % \
                     (caller, e, e.sim.name, sim.name)
            log.error(errmsg)
            raise ValueError(errmsg)
        distinct[e] = None
    return list(distinct)

def _done(sim, value):
    # an event with nothing to wait for is processed from the start
    evt = Event(sim)
    evt._value = value
    evt._state = Event.PROCESSED
    return evt

def any_of(sim, events):
    """Create an event that is triggered as soon as one of the given events
    has been processed.

    The value of the returned event is the first event that has been
    processed. The other events are not affected: they will be
    processed on their own, or aborted, as usual. If none of the given
    events is ever processed (for instance, all of them are aborted),
    the returned event stays pending forever. If no event is given,
    the returned event is already processed.

    """

    events = _distinct(sim, events, "any_of")
    if len(events) == 0:
        return _done(sim, None)

    result = Event(sim)
    for e in events:
        if e.processed():
            result.trigger(e)
            return result

    def _check(e):
        result.trigger(e)
    for e in events:
        e.add_callback(_check)
    return result

def all_of(sim, events):
    """Create an event that is triggered once all of the given events have
    been processed.

    The value of the returned event is the list of values of the given
    events (duplicates removed, in the order first given). An aborted
    event is never processed; if any of the given events is aborted,
    the returned event stays pending forever. If no event is given, the
    returned event is already processed.

    """

    events = _distinct(sim, events, "all_of")
    if len(events) == 0:
        return _done(sim, [])

    result = Event(sim)
    remaining = [sum(1 for e in events if not e.processed())]

    def _fire():
        result.trigger([e.value for e in events])

    def _check(e):
        remaining[0] -= 1
        if remaining[0] == 0:
            _fire()

    if remaining[0] == 0:
        _fire()
    else:
        for e in events:
            if not e.processed():
                e.add_callback(_check)
    return result
