"""Customers arrive at a bank with one counter at random times; a
customer gives up if the counter doesn't become available within
MAX_WAIT. Run with -v or -vv to see the simulator's logging."""

import random
import evsim

RANDOM_SEED = 42            # random seed for repeatability
NUM_CUSTOMERS = 10          # total number of customers
MEAN_ARRIVAL_INTV = 10.0    # mean time between new customers
MAX_WAIT = 16.0             # max time a customer waits for the counter
MEAN_SERVICE_TIME = 12.0    # mean time at the counter for each customer

@evsim.process
def customer(sim, counter, idx, rng):
    print("[%5.1f] Customer %d arrives" % (sim.now, idx))

    req = counter.request()
    timeout = sim.timeout(MAX_WAIT)
    sim.wait([req, timeout], method=any)

    if not req.triggered():
        req.abort()
        print("[%5.1f] Customer %d leaves unhappy" % (sim.now, idx))
        return False
    timeout.abort()

    print("[%5.1f] Customer %d gets to the counter" % (sim.now, idx))
    sim.sleep(rng.expovariate(1.0/MEAN_SERVICE_TIME))
    print("[%5.1f] Customer %d leaves" % (sim.now, idx))
    counter.release()
    return True

@evsim.process
def customer_source(sim, counter, rng):
    customers = []
    for idx in range(1, NUM_CUSTOMERS+1):
        customers.append(customer(sim, counter, idx, rng))
        sim.sleep(rng.expovariate(1.0/MEAN_ARRIVAL_INTV))
    served = sim.wait(customers)
    print("[%5.1f] %d of %d customers served" % (sim.now, sum(served), len(served)))

sim = evsim.simulator("bank")
counter = sim.resource(capacity=1, name="counter")
customer_source(sim, counter, random.Random(RANDOM_SEED))
sim.run()
sim.show_runtime_report()
