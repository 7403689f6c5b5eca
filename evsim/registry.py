# FILE INFO ###################################################
# Created on October 18, 2026
###############################################################

import itertools, weakref

__all__ = ["get_simulator"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

class _Registry(object):
    instance = None
    def __new__(cls):
        if not _Registry.instance:
            _Registry.instance = _Registry.__OneInstance()
        return _Registry.instance
    def __getattr__(self, name):
        return getattr(self.instance, name)
    def __setattr__(self, name, value):
        return setattr(self.instance, name, value)

    class __OneInstance:
        """The first simulator creates one and only one instance of this class
        for the entire run. That is, this class is expected to be a
        singleton, which keeps track of all named simulators."""

        def __init__(self):
            """Initialization is called by the first created simulator when the
            singleton is created. We use this opportunity to apply the
            command-line options."""

            # turn logging info on if we are in verbose mode
            from evsim import args
            self.args = args
            if args.debug:
                logging.basicConfig(level=logging.DEBUG)
            elif args.verbose:
                logging.basicConfig(level=logging.INFO)

            # a map from names to simulator instances
            self.named_simulators = weakref.WeakValueDictionary()
            self._anonymous = itertools.count(1)

        def register_simulator(self, name, sim):
            """Register the simulator with the given name. This may replace an
            earlier simulator of the same name."""
            if name in self.named_simulators:
                log.warning("simulator '%s' replaces an earlier one of the same name" % name)
            self.named_simulators[name] = sim

        def get_simulator(self, name):
            """Return the simulator with the given name, or None if no such
            simulator can be found."""
            return self.named_simulators.get(name, None)

        def unique_name(self):
            """Return a name not used by any registered simulator."""
            while True:
                name = "sim-%d" % next(self._anonymous)
                if name not in self.named_simulators:
                    return name

def get_simulator(name):
    """Return the simulator with the given name, or None if no such
    simulator has been created."""
    return _Registry().get_simulator(name)
