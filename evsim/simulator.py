# FILE INFO ###################################################
# Created on October 18, 2026
###############################################################

import time

from greenlet import GreenletExit

from .event import *
from .event import _EventList_
from .process import *
from .condition import any_of, all_of
from .registry import _Registry
from .resource import *

__all__ = ["simulator", "infinite_time", "minus_infinite_time"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

class simulator:
    """A simulator instance.

    Each simulator instance has an independent timeline (i.e., event
    list) on which events are scheduled and processed in timestamp
    order; events with the same timestamp are processed in the order
    in which they were scheduled. The simulator is the only driver of
    the simulation: processes run only when the simulator processes an
    event they are waiting on.

    Each simulator can have an optional name, which however must be
    globally unique. Or, it can remain anonymous, in which case a
    unique name is generated for it. Each simulator maintains an event
    list and a simulation clock.

    A simulator is not thread-safe: the events, processes and
    resources of a simulator must only be used from the thread
    running the simulator.

    """

    def __init__(self, name=None, init_time=0):
        """Create a simulator.

        Args:
            name (string): a name of the simulator; if ignored, the
                system will generate a unique name for the simulator;
                if specified, the name needs to be unique so that the
                name can be used to retrieve the corresponding
                simulator instance

            init_time (float): the optional start time of the
                simulator; if unspecified, the default is zero

        """

        # note the registry is implemented as a singleton
        self._registry = _Registry()

        if name is None:
            self.name = self._registry.unique_name()
        else:
            self.name = name
        self._registry.register_simulator(self.name, self)
        log.info("creating simulator '%s' at time %g" % (self.name, init_time))

        self.init_time = self.now = init_time
        self._eventlist = _EventList_(init_time)
        self._theproc = None
        self._running = False

        # performance statistics
        self._runtime = {
            "start_clock": time.time(),
            "scheduled_events": 0,
            "processed_events": 0,
            "aborted_events": 0,
            "started_processes": 0,
            "finished_processes": 0,
            "destroyed_processes": 0,
        }

    ###################
    # event scheduling #
    ###################

    def event(self, name=None):
        """Create and return a pending event."""
        return Event(self, name)

    def schedule(self, evt, delay=0):
        """Schedule an event to be processed 'delay' from now.

        The event state is not changed by scheduling; use the event's
        trigger() method to trigger an event at the current time.

        Args:
            evt (Event): the event to be scheduled; it must be an
                event of this simulator

            delay (float): relative time from now at which the event
                is to be processed; it must be a non-negative value

        """

        if not isinstance(evt, Event) or evt.sim is not self:
            errmsg = "simulator.schedule(evt=%r) not an event of simulator '%s'" % (evt, self.name)
            log.error(errmsg)
            raise TypeError(errmsg)
        if delay < 0:
            errmsg = "[%g] simulator.schedule(delay=%r) negative delay" % (self.now, delay)
            log.error(errmsg)
            raise ValueError(errmsg)

        self._runtime["scheduled_events"] += 1
        self._eventlist.insert(evt, self.now+delay)

    def timeout(self, duration, value=None, name=None):
        """Create and return an event to be processed after 'duration' from
        now.

        The event remains pending until it's processed; thus it can be
        aborted before then (for example, when the timeout has lost a
        race against another event), in which case the event will not
        be processed.

        Args:
            duration (float): relative time from now; it must be a
                non-negative value

            value (object): the value carried by the event

            name (string): an optional name for the event

        """

        if duration < 0:
            errmsg = "[%g] simulator.timeout(duration=%r) negative duration" % (self.now, duration)
            log.error(errmsg)
            raise ValueError(errmsg)
        e = Event(self, name)
        e._value = value
        self.schedule(e, duration)
        return e

    def any_of(self, events):
        """Return an event triggered when any of the given events is
        processed; see evsim.condition.any_of()."""
        return any_of(self, events)

    def all_of(self, events):
        """Return an event triggered when all of the given events are
        processed; see evsim.condition.all_of()."""
        return all_of(self, events)

    ##############################
    # process scheduling methods #
    ##############################

    def process(self, proc, *args, name=None, offset=None, **kwargs):
        """Create a process and schedule its execution.

        A process is a separate thread of control. During its
        execution, a process can sleep for some time, or wait for
        events. In any case, the process can be suspended and the
        simulation time may advance until it resumes execution.

        Args:
            proc (function): the starting function of the process,
                which can be an arbitrary user-defined function, such
                as a closure or a bound method

            args (list): the positional arguments as a list to be
                passed to the starting function when the process
                begins

            name (string): an optional name for the process

            offset (float): relative time from now at which the
                process is expected to start running; if provided, it
                must be a non-negative value; if ignored, the process
                starts at the current time (but never before this
                method returns)

            kwargs (dict): the keyworded arguments as a dictionary to
                be passed to the starting function when the process
                begins

        Returns:
            This method returns the process being created, which is
            also the event triggered when the process finishes.

        """

        if offset is None:
            offset = 0
        elif offset < 0:
            errmsg = "[%g] simulator.process(offset=%r) negative offset" % (self.now, offset)
            log.error(errmsg)
            raise ValueError(errmsg)
        return Process(self, name, proc, args, kwargs, offset)

    def cur_process(self):
        """Return the current running process, or None if we are not in a
        process context."""

        assert self._theproc is None or \
            self._theproc.state == Process.STATE_RUNNING or \
            self._theproc.state == Process.STATE_TERMINATED
        return self._theproc

    def wait(self, events, method=all):
        """The current process waits on one or more events.

        This method must be called within a process context (not in a
        callback or in the main function). If the event has already
        been processed, the process continues right away. If the event
        has been aborted, the process is destroyed right away; the
        method does not return. Otherwise, the process is suspended
        until the event is processed. Note that if the event is
        aborted while the process is waiting, the process is destroyed
        and won't resume.

        Args:
            events (Event, list, tuple): either an event or a
                list/tuple of events

            method (function): can be either 'all' (the default) or
                'any'; if 'all', the process waits for all events in
                the list to be processed; if 'any', the process waits
                for any of them to be processed; this parameter has
                no effect if a single event is given

        Returns:
            The value of the event. For a list of events, it's the list
            of values if the method is 'all', or the first processed
            event if the method is 'any'.

        """

        # must be called within process context
        p = self.cur_process()
        if p is None:
            errmsg = "simulator.wait() outside process context"
            log.error(errmsg)
            raise RuntimeError(errmsg)
        if p.state == Process.STATE_TERMINATED:
            # the process is being destroyed; it can't be suspended again
            raise GreenletExit

        if isinstance(events, (list, tuple)):
            if method is all:
                evt = all_of(self, events)
            elif method is any:
                evt = any_of(self, events)
            else:
                errmsg = "simulator.wait() with unknown method"
                log.error(errmsg)
                raise ValueError(errmsg)
        elif isinstance(events, Event):
            evt = events
        else:
            errmsg = "simulator.wait() one event or a list of events expected"
            log.error(errmsg)
            raise TypeError(errmsg)
        if evt.sim is not self:
            errmsg = "simulator.wait() %s belongs to simulator '%s'" % (evt, evt.sim.name)
            log.error(errmsg)
            raise ValueError(errmsg)

        if evt.processed():
            return evt.value
        if evt.aborted():
            # the wait can never be satisfied; the process goes away
            if p.pending(): p.abort()
            else: p._destroy()

        # the control will be switched back to the simulator's main
        # event loop (i.e., the process will be put on hold)...
        p.suspend(evt)
        # the control comes back now; the process resumes execution...
        return evt.value

    def sleep(self, duration):
        """The current process sleeps for the given duration (which must be
        non-negative). This method must be called within a process
        context."""
        self.wait(self.timeout(duration))

    #########################################
    # resources                             #
    #########################################

    def resource(self, capacity=1, name=None):
        """Create and return a resource.

        Args:
            capacity (int): the capacity of the resource; the value
                must be a positive integer; the default is one

            name (string): the optional name of the resource

        """
        return Resource(self, capacity, name)

    ######################
    # running simulation #
    ######################

    def run(self, offset=None, until=None):
        """Run simulation and process events.

        This method processes the events in timestamp order and
        advances the simulation time accordingly.

        Args:
            offset (float): relative time from now until which the
                simulator should advance its simulation time; if
                provided, it must be a non-negative value

            until (float): the absolute time until which the simulator
                should advance its simulation time; if provided, it
                must not be earlier than the current time

        The user can specify either 'offset' or 'until', but not both;
        if both 'offset' and 'until' are ignored, the simulator will
        run as long as there are events on the event list. Be careful,
        in this case, the simulator may run forever for some models as
        there could always be events scheduled in the future.

        When the method returns, the simulation time will advance to
        the designated time, if either 'offset' or 'until' is
        specified. All events with timestamps no later than the
        designated time will be processed; later events remain on
        the event list for the simulation to be resumed. If neither
        'offset' nor 'until' is provided, the simulator will advance
        to the time of the last processed event.

        An unhandled exception raised by a process stops the
        simulation and is raised from this method.

        """

        # figure out the horizon, up to which all events will be processed
        upper_specified = True
        if until is None and offset is None:
            upper = infinite_time
            upper_specified = False
        elif until is not None and offset is not None:
            errmsg = "simulator.run(until=%r, offset=%r) duplicate specification" % (until, offset)
            log.error(errmsg)
            raise ValueError(errmsg)
        elif offset is not None:
            if offset < 0:
                errmsg = "simulator.run(offset=%r) negative offset" % offset
                log.error(errmsg)
                raise ValueError(errmsg)
            upper = self.now + offset
        elif until < self.now:
            errmsg = "simulator.run(until=%r) earlier than now (%r)" % (until, self.now)
            log.error(errmsg)
            raise ValueError(errmsg)
        else: upper = until

        self._run(upper, upper_specified)

    def run_until(self, horizon):
        """Run simulation until the given time; the same as run(until=horizon)."""
        self.run(until=horizon)

    def _run(self, upper, updating_until):
        """Run simulation up to the given time 'upper' (by processing all
        events with timestamps no later than 'upper'), and if
        'updating_until' is true, update the simulation clock to
        'upper' after processing all the events."""

        self._enter_loop("run")
        log.debug("[%g] simulator '%s' run until %g" % (self.now, self.name, upper))
        try:
            # this is the main event loop of the simulator!
            while len(self._eventlist) > 0:
                t = self._eventlist.get_min()
                if t > upper: break
                self._process_one_event()
        finally:
            self._running = False

        # after all the events, make sure we don't wind back the clock
        # if upper (set by either 'until' or 'offset') has been
        # explicitly specified by the user
        if updating_until:
            self._eventlist.last = upper
            self.now = upper
        log.debug("[%g] simulator '%s' stop with %d events left" %
                  (self.now, self.name, len(self._eventlist)))

    def step(self):
        """Process only one event.

        This method processes the next event and advances the
        simulation time to the time of the next event. If no event is
        available on the event list, this method does nothing.

        """

        self._enter_loop("step")
        try:
            if len(self._eventlist) > 0:
                self._process_one_event()
        finally:
            self._running = False

    def peek(self):
        """Return the time of the next scheduled event, or infinity if no
        future events are available."""

        if len(self._eventlist) > 0:
            return self._eventlist.get_min()
        else:
            return infinite_time

    def _enter_loop(self, caller):
        # the main loop can't be entered from a process or re-entered
        # from a callback
        if self._theproc is not None or self._running:
            errmsg = "simulator.%s() called while simulator '%s' is running" % (caller, self.name)
            log.error(errmsg)
            raise RuntimeError(errmsg)
        self._running = True

    def _process_one_event(self):
        """Process one event on the event list, assuming there is a least one
        event on the event list."""

        t, e = self._eventlist.delete_min()
        self.now = t
        self._runtime["processed_events"] += 1
        e._process()

    def runtime_report(self):
        """Return the runtime performance counters of the simulator as a
        dictionary."""

        report = dict(self._runtime)
        del report["start_clock"]
        report["wall_clock_time"] = time.time()-self._runtime["start_clock"]
        report["simulation_time"] = self.now-self.init_time
        report["pending_events"] = len(self._eventlist)
        return report

    def show_calendar(self):
        """Print the list of all future events currently on the event
        list. This is an expensive operation and should be used
        responsively, possibly just for debugging purposes."""

        print("list of all future events (num=%d) at time %g on simulator '%s':" %
              (len(self._eventlist), self.now, self.name))
        for t, _, e in self._eventlist.entries():
            print("  %g: %s" % (t, e))

    def show_runtime_report(self, prefix=''):
        """Print a report on the simulator's runtime performance.

        Args:
            prefix (str): all print-out lines will be prefixed by this
                string (the default is empty); this would help if one
                wants to find the report in a large amount of output

        """

        r = self.runtime_report()
        print('%s*********** simulator performance metrics ***********' % prefix)
        print('%ssimulator name: %s' % (prefix, self.name))
        print('%ssimulation time: %g' % (prefix, r["simulation_time"]))
        print('%sexecution time: %g' % (prefix, r["wall_clock_time"]))
        print('%sscheduled events: %d (processed=%d, aborted=%d, pending=%d)' %
              (prefix, r["scheduled_events"], r["processed_events"],
               r["aborted_events"], r["pending_events"]))
        print('%sprocesses: started=%d, finished=%d, destroyed=%d' %
              (prefix, r["started_processes"], r["finished_processes"],
               r["destroyed_processes"]))
