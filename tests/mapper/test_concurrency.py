"""Tests for concurrent use of one Mapper.

Critical Invariants:
- Concurrent mappings of the same or different shape pairs do not corrupt the cache
- No lock is held while a converter runs, so converters may re-enter the mapper
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from automapper import Mapper


@dataclass
class Row:
    id: int = 0
    name: str = ""


@dataclass
class View:
    id: int = 0
    name: str = ""


@dataclass
class Summary:
    id: str = ""


@dataclass
class Address:
    city: str = ""


@dataclass
class AddressCopy:
    city: str = ""


@dataclass
class Customer:
    address: Address = field(default_factory=Address)


@dataclass
class CustomerLabel:
    address: str = ""


def test_concurrent_mappings_share_one_plan_per_pair(mapper):
    mapper.register_converter(str, source=int, target=str)
    sources = [Row(id=i + 1, name=f"row{i}") for i in range(200)]

    def to_view(source):
        destination = View()
        mapper.map(source, destination)
        return destination

    def to_summary(source):
        destination = Summary()
        mapper.map(source, destination)
        return destination

    with ThreadPoolExecutor(max_workers=8) as pool:
        views = list(pool.map(to_view, sources))
        summaries = list(pool.map(to_summary, sources))

    assert [(v.id, v.name) for v in views] == [(s.id, s.name) for s in sources]
    assert [s.id for s in summaries] == [str(s.id) for s in sources]
    assert set(mapper.plans.keys()) == {(Row, View), (Row, Summary)}


def test_registration_during_mappings(mapper):
    """Registering converters while mappings run is safe."""

    def register(i):
        mapper.register_converter(lambda value, i=i: f"{i}:{value}", source=int, target=str)

    def map_one(i):
        destination = View()
        mapper.map(Row(id=i + 1), destination)
        return destination.id

    with ThreadPoolExecutor(max_workers=8) as pool:
        registered = [pool.submit(register, i) for i in range(50)]
        mapped = [pool.submit(map_one, i) for i in range(50)]
        results = [future.result(timeout=10) for future in mapped]
        for future in registered:
            future.result(timeout=10)

    assert results == [i + 1 for i in range(50)]
    assert len(mapper.converters) == 1


def test_converter_can_reenter_mapper(mapper):
    """CRITICAL: A converter may call back into the same mapper.

    Why: Locks held during converter execution would deadlock here, and would
    block unrelated mappings behind slow converters.
    """

    def describe(address: Address) -> str:
        # Touches both locked stores and maps another pair
        assert mapper.plan_for(Customer, CustomerLabel) is None
        assert mapper.converters.has(Address, str)
        copied = mapper.create(address, AddressCopy)
        return f"in {copied.city}"

    mapper.register_converter(describe)

    def run():
        destination = CustomerLabel()
        mapper.map(Customer(address=Address(city="Oslo")), destination)
        return destination.address

    with ThreadPoolExecutor(max_workers=1) as pool:
        assert pool.submit(run).result(timeout=10) == "in Oslo"

    assert mapper.plan_for(Address, AddressCopy) is not None


def test_independent_mappers_do_not_share_state():
    first = Mapper()
    second = Mapper()
    first.register_converter(str, source=int, target=str)

    first.map(Row(id=1), Summary())

    assert len(second.converters) == 0
    assert len(second.plans) == 0
