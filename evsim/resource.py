# FILE INFO ###################################################
# Created on October 18, 2026
###############################################################

from collections import deque

from .event import Event

__all__ = ["Resource"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

class _Request(Event):
    """The event of a request to a resource; it's triggered when a unit of
    the resource has been granted to the requester."""

    def __init__(self, resource):
        super().__init__(resource._sim, resource.name)
        self._resource = resource

    def abort(self):
        """Abort the request. A request still waiting in the queue is
        withdrawn and will never be granted; a granted request cannot
        be aborted (the resource must be released instead)."""

        if not self.pending():
            return
        # out of the queue before the waiters are destroyed, since they
        # may release units while unwinding
        self._resource._withdraw(self)
        super().abort()

class Resource(object):
    """A resource provides services to processes.

    A resource basically models a single-server or multi-server queue.
    A resource can allow only a limited number of processes to be
    serviced at any given time. A process arrives and requests a
    server at the resource. If there is an available server, the
    request is granted at once. If there isn't an available server,
    the request is placed in a queue. When another process has
    finished and released the server, the request waiting the longest
    will be granted (that is, the queue is first in first out).

    A process is expected to follow the sequence of actions to use
    the resource. The process first calls the request() method and
    waits on the returned event. Once the event has been processed,
    the process has acquired the resource. The process can use the
    resource for as long as it needs to; this is usually modeled using
    the sleep() method. Afterwards, the process is expected to call
    the release() method to free the resource, so that another waiting
    process may have a chance to gain access to the resource.

    A process that doesn't want to wait forever can wait on the
    request together with a timeout (using any_of()); if the timeout
    wins the race, the process should abort the request, which removes
    the request from the queue::

        req = counter.request()
        sim.wait([req, sim.timeout(patience)], method=any)
        if not req.triggered():
            req.abort()   # leaves without being served

    """

    def __init__(self, sim, capacity=1, name=None):
        """A resource is created against a simulator (or using simulator's
        resource() function); a resource has a capacity (which must be
        a postive integer indicating the number of servers at the
        resource) and can have an optional name."""

        if not isinstance(capacity, int):
            errmsg = "Resource(capacity=%r) non-integer capacity" % capacity
            log.error(errmsg)
            raise TypeError(errmsg)
        if capacity <= 0:
            errmsg = "Resource(capacity=%r) non-positive capacity" % capacity
            log.error(errmsg)
            raise ValueError(errmsg)

        self._sim = sim
        self.name = name
        self.capacity = capacity
        self._available = capacity
        self._queue = deque()

    def request(self):
        """Request a server from the resource.

        This method returns an event, which is triggered (at the
        current time) if a server is available and no other request is
        waiting; otherwise, the request is queued and the event will
        be triggered when a server is released to it.

        """

        req = _Request(self)
        if self._available > 0 and len(self._queue) == 0:
            self._available -= 1
            req.trigger()
        else:
            self._queue.append(req)
            log.debug("[%g] resource '%s' queues request %d (queue=%d)" %
                      (self._sim.now, self.name, req.id, len(self._queue)))
        return req

    def release(self):
        """Relinquish a server acquired previously.

        If requests are waiting, the server is granted to the one
        that has waited the longest. Releasing more servers than have
        been granted is an error.

        """

        if self.num_in_service() == 0:
            errmsg = "[%g] Resource.release() without matching request" % self._sim.now
            log.error(errmsg)
            raise RuntimeError(errmsg)

        while len(self._queue) > 0:
            req = self._queue.popleft()
            if req.pending():
                req.trigger()
                return
        self._available += 1

    def _withdraw(self, req):
        self._queue.remove(req)
        log.debug("[%g] resource '%s' withdraws request %d (queue=%d)" %
                  (self._sim.now, self.name, req.id, len(self._queue)))

    def num_in_service(self):
        """Return the number of servers currently granted. It's a number
        between zero and the number of servers (the capacity)."""
        return self.capacity - self._available

    def num_in_queue(self):
        """Return the number of requests waiting for a server."""
        return len(self._queue)

    def available(self):
        """Return the number of free servers."""
        return self._available
