import pytest

import evsim

def test_any_of_first_wins_and_losers_continue(sim):
    a = sim.timeout(5, value="a")
    b = sim.timeout(8, value="b")
    r = sim.any_of([a, b])
    seen = []
    r.add_callback(lambda evt: seen.append(("r", sim.now)))
    b.add_callback(lambda evt: seen.append(("b", sim.now)))
    sim.run()
    assert seen == [("r", 5), ("b", 8)]
    assert r.value is a
    assert b.processed()

def test_all_of_waits_for_the_last(sim):
    a = sim.timeout(5, value="a")
    b = sim.timeout(8, value="b")
    r = sim.all_of([b, a])
    seen = []
    r.add_callback(lambda evt: seen.append(sim.now))
    sim.run_until(6)
    assert r.pending()
    sim.run()
    assert seen == [8]
    assert r.value == ["b", "a"]

def test_all_of_with_aborted_member_never_completes(sim):
    a = sim.timeout(5)
    b = sim.timeout(8)
    r = sim.all_of([a, b])
    b.abort()
    sim.run()
    assert a.processed()
    assert r.pending()

def test_any_of_with_only_aborted_members_never_completes(sim):
    a = sim.timeout(5)
    b = sim.event()
    r = a | b
    a.abort()
    b.abort()
    sim.run()
    assert r.pending()

def test_any_of_ignores_aborted_member(sim):
    a = sim.timeout(5)
    b = sim.timeout(8)
    r = sim.any_of([a, b])
    a.abort()
    sim.run_until(5)
    assert r.pending()
    sim.run()
    assert r.processed()
    assert r.value is b

def test_empty_inputs_are_already_processed(sim):
    r = sim.any_of([])
    assert r.processed()
    assert r.value is None
    r = sim.all_of([])
    assert r.processed()
    assert r.value == []

def test_wait_on_empty_all_of_does_not_suspend(sim):
    log = []
    def a():
        log.append(sim.wait([]))
        log.append("a")
    def b():
        log.append("b")
    sim.process(a)
    sim.process(b)
    sim.run()
    assert log == [[], "a", "b"]

def test_duplicates_are_collapsed(sim):
    a = sim.timeout(1, value=1)
    b = sim.timeout(2, value=2)
    r = sim.all_of([a, a, b, a])
    sim.run()
    assert r.processed()
    assert r.value == [1, 2]

def test_already_processed_inputs(sim):
    a = sim.timeout(1, value="a")
    sim.run()
    b = sim.event()
    r = sim.any_of([b, a])
    assert r.triggered()
    r2 = sim.all_of([a])
    assert r2.triggered()
    r3 = sim.all_of([a, b])
    assert r3.pending()
    b.trigger("b")
    sim.run()
    assert r.value is a
    assert r2.value == ["a"]
    assert r3.value == ["a", "b"]

def test_operators_and_nesting(sim):
    a = sim.timeout(1)
    b = sim.timeout(4)
    c = sim.timeout(3)
    r = (a | b) & c
    seen = []
    r.add_callback(lambda evt: seen.append(sim.now))
    r2 = (a & b) | c
    r2.add_callback(lambda evt: seen.append(("r2", sim.now)))
    sim.run()
    assert seen == [3, ("r2", 3)]

def test_wait_with_methods(sim):
    log = []
    a = sim.timeout(2, value="a")
    b = sim.timeout(6, value="b")
    def body():
        r = sim.wait([a, b], method=any)
        log.append((sim.now, r))
        r = sim.wait((a, b))
        log.append((sim.now, r))
    sim.process(body)
    sim.run()
    assert log == [(2, a), (6, ["a", "b"])]

def test_wait_argument_checks(sim):
    errors = []
    def body():
        for args, kwargs in [((["x"],), {}),
                             (([sim.event()],), {"method": min}),
                             (("x",), {})]:
            try:
                sim.wait(*args, **kwargs)
            except (TypeError, ValueError) as e:
                errors.append(type(e))
    sim.process(body)
    sim.run()
    assert errors == [TypeError, ValueError, TypeError]

def test_inputs_from_another_simulator(sim):
    other = evsim.simulator()
    with pytest.raises(ValueError):
        sim.any_of([sim.event(), other.event()])
    with pytest.raises(TypeError):
        sim.all_of([sim.event(), "x"])

def test_timeout_race_pattern(sim):
    log = []
    work = sim.timeout(10)
    def body():
        timeout = sim.timeout(5)
        winner = sim.wait(work | timeout)
        if winner is not work:
            work.abort()
        log.append((sim.now, winner is timeout))
    sim.process(body)
    sim.run()
    assert log == [(5, True)]
    assert work.aborted()
