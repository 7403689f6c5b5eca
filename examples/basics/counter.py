"""Customers arrive at a bank with one counter; a customer leaves
unhappy if the counter doesn't become available within MAX_WAIT.
All times are fixed so that the run is repeatable."""

import evsim

MAX_WAIT = 16              # max time a customer waits for the counter
INTERVALS = [2, 1, 7, 18]  # time between consecutive customers
SERVICE = [10, 12, 4, 9, 5] # service time of each customer

@evsim.process
def customer(sim, counter, idx):
    print("[%5.1f] Customer %d arrives" % (sim.now, idx))

    req = counter.request()
    sim.wait(req | sim.timeout(MAX_WAIT))
    if not req.triggered():
        req.abort()
        print("[%5.1f] Customer %d leaves unhappy" % (sim.now, idx))
        return

    print("[%5.1f] Customer %d gets to the counter" % (sim.now, idx))
    sim.sleep(SERVICE[idx-1])
    print("[%5.1f] Customer %d leaves" % (sim.now, idx))
    counter.release()

@evsim.process
def source(sim, counter):
    for idx in range(1, len(SERVICE)+1):
        customer(sim, counter, idx)
        if idx <= len(INTERVALS):
            sim.sleep(INTERVALS[idx-1])

sim = evsim.simulator()
counter = sim.resource(capacity=1)
source(sim, counter)
sim.run()
print("[%5.1f] Simulation ends" % sim.now)
