"""Processes started from a free function, from methods (with the
simulator as 'self.sim' or as an argument), and from a closure."""

import evsim

class Machine:
    def __init__(self, sim, name, period):
        self.sim = sim
        self.name = name
        self.period = period

    @evsim.process
    def work(self, parts):
        for i in range(parts):
            self.sim.sleep(self.period)
            print("%g: %s finishes part %d" % (self.sim.now, self.name, i+1))
        return parts

class Inspector:
    @evsim.process
    def report(self, sim, proc):
        sim.wait(proc)
        print("%g: inspector sees supervisor finished" % sim.now)

@evsim.process
def supervisor(sim, machines):
    done = sim.wait([m.work(2) for m in machines])
    print("%g: supervisor sees %r parts done" % (sim.now, done))

def make_clock(sim, ticks):
    def clock():
        for _ in range(ticks):
            sim.sleep(4)
            print("%g: tick" % sim.now)
    return clock

sim = evsim.simulator()
sup = supervisor(sim, [Machine(sim, "A", 3), Machine(sim, "B", 5)])
Inspector().report(sim, sup)
sim.process(make_clock(sim, 2))
sim.run()
