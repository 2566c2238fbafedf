"""Tests for the plan cache."""

import threading
from dataclasses import dataclass

import pytest

from automapper import FieldStep, MappingPlan, PlanCache, Strategy


@dataclass
class Row:
    value: int = 0


@dataclass
class View:
    value: int = 0


def make_plan(source_type=Row, destination_type=View):
    step = FieldStep(
        source_index=0,
        destination_index=0,
        source_name="value",
        destination_name="value",
        source_type=int,
        destination_type=int,
        strategy=Strategy.IDENTICAL,
    )
    return MappingPlan(source_type=source_type, destination_type=destination_type, steps=(step,))


@pytest.fixture
def cache():
    return PlanCache()


def test_miss_then_hit(cache):
    assert cache.get(Row, View) is None

    plan = make_plan()
    assert cache.put(plan) is plan
    assert cache.get(Row, View) is plan
    assert (Row, View) in cache
    assert len(cache) == 1


def test_keys_are_ordered_pairs(cache):
    """A plan for (Row, View) is never used for (View, Row)."""
    cache.put(make_plan())

    assert cache.get(View, Row) is None
    assert cache.keys() == [(Row, View)]


def test_first_installed_plan_wins(cache):
    first = make_plan()
    second = make_plan()

    assert cache.put(first) is first
    assert cache.put(second) is first
    assert cache.get(Row, View) is first


def test_plans_are_immutable():
    plan = make_plan()
    with pytest.raises(AttributeError):
        plan.steps = ()  # type: ignore[misc]


def test_iteration_snapshot(cache):
    cache.put(make_plan())
    cache.put(make_plan(View, Row))

    assert {plan.key for plan in cache} == {(Row, View), (View, Row)}


def test_concurrent_puts_keep_one_plan_per_pair(cache):
    plans = [make_plan() for _ in range(32)]
    stored = []
    barrier = threading.Barrier(len(plans))

    def install(plan):
        barrier.wait()
        stored.append(cache.put(plan))

    threads = [threading.Thread(target=install, args=(plan,)) for plan in plans]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 1
    assert all(plan is stored[0] for plan in stored)
