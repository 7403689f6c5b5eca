import pytest

import evsim

def test_fifo_grant_on_release(sim):
    res = sim.resource(capacity=1)
    log = []
    def x():
        sim.wait(res.request())
        log.append(("x", sim.now))
        sim.sleep(10)
        res.release()
    def y():
        sim.sleep(2)
        req = res.request()
        sim.sleep(1)
        assert not req.triggered()
        assert res.num_in_queue() == 1
        sim.wait(req)
        log.append(("y", sim.now))
        res.release()
    sim.process(x)
    sim.process(y)
    sim.run()
    assert log == [("x", 0), ("y", 10)]
    assert res.available() == 1

def test_waiting_requests_served_in_arrival_order(sim):
    res = sim.resource()
    log = []
    def user(i):
        sim.sleep(i)
        sim.wait(res.request())
        log.append((i, sim.now))
        sim.sleep(5)
        res.release()
    for i in range(4):
        sim.process(user, i)
    sim.run()
    assert log == [(0, 0), (1, 5), (2, 10), (3, 15)]

def test_capacity(sim):
    res = evsim.Resource(sim, capacity=2, name="pair")
    r1 = res.request()
    r2 = res.request()
    r3 = res.request()
    assert r1.triggered() and r2.triggered()
    assert r3.pending()
    assert res.num_in_service() == 2
    assert res.num_in_queue() == 1
    res.release()
    assert r3.triggered()
    assert res.num_in_service() == 2
    assert res.num_in_queue() == 0
    res.release()
    res.release()
    assert res.available() == 2

def test_resource_checks(sim):
    with pytest.raises(TypeError):
        sim.resource(capacity=1.5)
    with pytest.raises(ValueError):
        sim.resource(capacity=0)
    res = sim.resource()
    with pytest.raises(RuntimeError):
        res.release()

def test_aborted_request_is_never_granted(sim):
    res = sim.resource()
    r1 = res.request()
    r2 = res.request()
    r3 = res.request()
    r2.abort()
    assert res.num_in_queue() == 1
    res.release()
    assert r2.aborted()
    assert r3.triggered()
    sim.run()
    assert not r2.processed()
    assert r3.processed()

def test_granted_request_cannot_be_aborted(sim):
    res = sim.resource()
    req = res.request()
    req.abort()
    assert req.triggered()
    assert res.num_in_service() == 1

def race(sim, res, hold, log):
    def holder():
        sim.wait(res.request())
        sim.sleep(hold)
        res.release()
    def racer():
        req = res.request()
        winner = sim.wait(req | sim.timeout(5))
        if winner is req:
            log.append(("served", sim.now))
            sim.sleep(1)
            res.release()
        else:
            req.abort()
            log.append(("gave up", sim.now))
        return req
    sim.process(holder)
    return sim.process(racer)

def test_timeout_race_request_wins(sim):
    res = sim.resource()
    log = []
    racer = race(sim, res, 3, log)
    sim.run()
    assert log == [("served", 3)]
    assert racer.value.processed()
    assert res.available() == 1

def test_timeout_race_timeout_wins(sim):
    res = sim.resource()
    log = []
    racer = race(sim, res, 10, log)
    sim.run_until(5)
    assert log == [("gave up", 5)]
    assert res.num_in_queue() == 0
    sim.run()
    req = racer.value
    assert req.aborted()
    assert not req.triggered()
    assert res.available() == 1
    assert sim.now == 10

def test_abort_request_of_waiter_that_releases_on_unwind(sim):
    res = sim.resource(capacity=2)
    queued = []
    def other():
        sim.wait(res.request())
        sim.sleep(10)
        res.release()
    def worker():
        sim.wait(res.request())
        try:
            req = res.request()
            queued.append(req)
            sim.wait(req)
        finally:
            res.release()
    sim.process(other)
    w = sim.process(worker)
    sim.run_until(1)
    req = queued[0]
    assert res.num_in_queue() == 1
    assert res.available() == 0
    req.abort()
    assert req.aborted()
    assert w.aborted()
    assert res.num_in_queue() == 0
    assert res.available() == 1
    sim.run()
    assert not req.triggered()
    assert res.available() == 2
