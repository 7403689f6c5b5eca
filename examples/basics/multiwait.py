import evsim

def p1(sim):
    sim.sleep(10)
    print("p1 triggers e1 at %g" % sim.now)
    e1.trigger("one")

    sim.sleep(10)
    print("p1 triggers e2 at %g" % sim.now)
    e2.trigger("two")

    sim.sleep(10)
    print("p1 triggers e3 at %g" % sim.now)
    e3.trigger("three")

    sim.sleep(10)
    print("p1 aborts e4 at %g" % sim.now)
    e4.abort()

def p2(sim):
    r = sim.wait([e1, e2])
    print("p2 resumes at %g (ret=%r)" % (sim.now, r))

    r = sim.wait(e3 | e4)
    print("p2 resumes at %g (ret=%s)" % (sim.now, r.name))

    # e4 is aborted later on, so this wait never ends
    sim.wait(e3 & e4)
    print("p2 resumes at %g" % sim.now)

def p3(sim):
    print("p3 waits on e4 at %g" % sim.now)
    e4.wait()
    print("p3 resumes at %g" % sim.now)

sim = evsim.simulator()
e1 = sim.event("e1")
e2 = sim.event("e2")
e3 = sim.event("e3")
e4 = sim.event("e4")
sim.process(p1, sim)
proc2 = sim.process(p2, sim)
proc3 = sim.process(p3, sim)
sim.run()
print("at %g: p2 pending=%r, p3 aborted=%r" % (sim.now, proc2.pending(), proc3.aborted()))
