# FILE INFO ###################################################
# Created on October 18, 2026
###############################################################

# greenlet must be installed as additional python package
from greenlet import greenlet, GreenletExit
import functools

from .event import Event

__all__ = ["Process", "process"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

class Process(Event):
    """A process is an independent thread of execution.

    A process is also the event that represents its own completion:
    when the start function of the process returns, the process (as an
    event) is triggered with the return value, so that other processes
    waiting on it resume at the same simulation time.

    The process does not run when it's created. It is started by a
    separate event scheduled at the current simulation time (or later
    if an offset is given), so that a process never runs inside the
    call frame of its creator.

    Aborting a process that has not finished also cancels its
    execution: if the process has not started, it never will; if it's
    suspended, it's destroyed and will never resume; if it aborts
    itself, it ends right there.

    """

    # process runtime state
    STATE_STARTED       = 0
    STATE_RUNNING       = 1
    STATE_SUSPENDED     = 2
    STATE_TERMINATED    = 3

    def __init__(self, sim, name, func, usr_args, usr_kwargs, offset=0):
        """A process is created using simulator's process() function or by
        calling a function decorated with process(); a process can be
        created by an other process or within the main function."""

        super().__init__(sim, name)
        self.func = func
        self.args = usr_args
        self.kwargs = usr_kwargs
        self.state = Process.STATE_STARTED
        self.main = None
        self.vert = None
        self._target = None # the event the process is waiting on

        self._start_evt = Event(sim, name)
        self._start_evt.add_callback(self._start)
        sim.schedule(self._start_evt, offset)

    def __str__(self):
        return "prc=%s (%s)" % \
            (self.name if self.name else self.func.__name__+'()',
             Event._state_names[self._state])

    def terminated(self):
        """Return whether the process has either finished or been destroyed."""
        return self.state == Process.STATE_TERMINATED

    def _start(self, evt):
        # the greenlet is created from the simulator's main loop, which
        # becomes its parent; control returns there when the process
        # suspends or ends
        self.main = greenlet.getcurrent()
        self.vert = greenlet(self.invoke)
        self._sim._runtime["started_processes"] += 1
        log.debug("[%g] simulator '%s' start %s" % (self._sim.now, self._sim.name, self))
        self._resume()

    def invoke(self):
        """Invoke the start function of the process and, when it returns,
        trigger the process with the return value."""

        retval = self.func(*self.args, **self.kwargs)
        self.state = Process.STATE_TERMINATED
        self._sim._runtime["finished_processes"] += 1
        log.debug("[%g] simulator '%s' finish %s" % (self._sim.now, self._sim.name, self))
        self.trigger(retval)

    def _resume(self):
        """Switch to the process and come back when it suspends or ends."""

        if self.state == Process.STATE_TERMINATED:
            # destroyed while waiting
            return

        self._target = None
        self.state = Process.STATE_RUNNING
        sim = self._sim
        prev, sim._theproc = sim._theproc, self
        try:
            self.vert.switch()
        except Exception as e:
            self.state = Process.STATE_TERMINATED
            errmsg = "[%g] simulator '%s' %s failed: %r" % (sim.now, sim.name, self, e)
            log.error(errmsg)
            raise
        finally:
            sim._theproc = prev

    def suspend(self, evt):
        """Wait on the given event and switch control to the simulator's main
        loop; return when the event has been processed."""

        assert self.state == Process.STATE_RUNNING
        assert self._sim._theproc is self
        assert self.vert and greenlet.getcurrent() is self.vert

        evt._add_waiter(self)
        self._target = evt
        self.state = Process.STATE_SUSPENDED
        self.main.switch()

    def abort(self):
        """Abort the process.

        The processes waiting on this process are destroyed, as with
        any event; and the process itself stops running. If the process
        has already finished, this method does nothing.

        """

        if not self.pending():
            return
        super().abort()
        self._destroy()

    def _destroy(self):
        self._start_evt.abort()
        if self.state == Process.STATE_TERMINATED:
            return

        self.state = Process.STATE_TERMINATED
        self._sim._runtime["destroyed_processes"] += 1
        log.debug("[%g] simulator '%s' destroy %s" % (self._sim.now, self._sim.name, self))
        if self._target is not None:
            self._target._remove_waiter(self)
            self._target = None

        if self.vert is None:
            # never started
            return
        cur = greenlet.getcurrent()
        if self.vert is cur:
            # the process destroys itself; the greenlet ends quietly
            raise GreenletExit
        if self.vert:
            # unwind the suspended greenlet and come back here afterwards
            sim = self._sim
            prev, sim._theproc = sim._theproc, self
            try:
                self.vert.parent = cur
                self.vert.throw()
            finally:
                sim._theproc = prev

def _owning_simulator(func, args):
    """Find the simulator of a process from the arguments of its start
    function: the first argument itself, the second argument, or the
    'sim' attribute of the first argument (if it's a method)."""

    from .simulator import simulator
    if len(args) > 0:
        if isinstance(args[0], simulator):
            return args[0]
        if len(args) > 1 and isinstance(args[1], simulator):
            return args[1]
        sim = getattr(args[0], 'sim', None)
        if isinstance(sim, simulator):
            return sim
    errmsg = "process %s() requires a simulator as the first or second argument, " \
             "or as the 'sim' attribute of the first argument" % func.__name__
    log.error(errmsg)
    raise TypeError(errmsg)

def process(func):
    """Decorator turning a function into a process factory.

    Calling the decorated function creates a process running the
    function (at the current simulation time) and returns the process,
    which can be waited on for the process to finish. The simulator is
    looked up from the arguments of the call::

        @process
        def customer(sim, idx): ...        # simulator as first argument

        class Shop:
            @process
            def serve(self, sim): ...      # ... as second argument

            @process
            def clean(self): ...           # ... as self.sim

    A closure that already holds the simulator can be started with
    simulator's process() function instead.

    """

    @functools.wraps(func)
    def start(*args, **kwargs):
        sim = _owning_simulator(func, args)
        return Process(sim, None, func, args, kwargs)
    return start
