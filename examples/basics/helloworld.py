import evsim

def print_message(sim):
    for _ in range(5):
        print("Hello world at time", sim.now)
        sim.sleep(1)

sim = evsim.simulator()
sim.process(print_message, sim, offset=10)
sim.run()
