"""End-to-end partition scenarios for counter replicas.

Each scenario drives a network through local writes, partitions and
heals, checking values and partition counts after every step.

Run:
    pytest tests/integration/test_counter_scenarios.py -v
"""

from __future__ import annotations

import logging
import random

import pytest

from crdtsim.crdt.g_counter import GCounter
from crdtsim.crdt.pn_counter import PNCounter
from crdtsim.network.peer_to_peer import PeerToPeerNetwork
from crdtsim.network.star import StarNetwork


class TestGCounterPeerToPeer:

    def test_partition_and_heal(self):
        network = PeerToPeerNetwork()
        a_counter, b_counter, c_counter = GCounter("A"), GCounter("B"), GCounter("C")
        a = network.add(a_counter)
        b = network.add(b_counter)
        network.add(c_counter)
        assert network.values() == {"A": 0, "B": 0, "C": 0}

        a_counter.increment(1)
        b_counter.increment(2)
        c_counter.increment(3)
        assert network.values() == {"A": 1, "B": 2, "C": 3}
        assert network.count_partitions() == 3

        network.broadcast(a)
        assert network.values() == {"A": 1, "B": 3, "C": 4}
        assert network.count_partitions() == 3

        network.broadcast_all()
        assert network.values() == {"A": 6, "B": 6, "C": 6}
        assert network.count_partitions() == 1

        network.disconnect(b)
        a_counter.increment(10)
        assert a_counter.query() == 16

        network.broadcast_all()
        assert network.values() == {"A": 16, "B": 6, "C": 16}
        assert network.count_partitions() == 2

        b_counter.increment(3)
        assert network.count_partitions() == 2

        network.reconnect(b)
        network.broadcast_all()
        assert network.count_partitions() == 1
        assert a_counter.query() == 19


class TestGCounterStar:

    def test_server_outage_and_recovery(self, caplog):
        caplog.set_level(logging.INFO, logger="crdtsim")
        network = StarNetwork()
        server_counter = GCounter("SERVER")
        a_counter, b_counter, c_counter = GCounter("A"), GCounter("B"), GCounter("C")

        server = network.set_server_replica(server_counter)
        a = network.add(a_counter)
        b = network.add(b_counter)
        network.add(c_counter)
        network.disconnect(server)
        assert network.values() == {"SERVER": 0, "A": 0, "B": 0, "C": 0}

        a_counter.increment(1)
        b_counter.increment(2)
        c_counter.increment(3)
        assert network.count_partitions() == 4

        network.sync_with_server(a)
        assert network.values() == {"SERVER": 0, "A": 1, "B": 2, "C": 3}
        assert network.count_partitions() == 4
        assert "Server is not reachable from replica 'A'." in caplog.text

        network.reconnect(server)
        network.sync_all_replicas_to_server()
        # Only SERVER and C have seen every update.
        assert network.count_partitions() == 3
        assert server_counter.query() == c_counter.query() == 6

        network.sync_all_replicas_to_server()
        assert network.count_partitions() == 1

        network.disconnect(b)
        a_counter.increment(10)
        network.sync_all_replicas_to_server()
        assert network.values() == {"SERVER": 16, "A": 16, "B": 6, "C": 16}
        assert network.count_partitions() == 2

        b_counter.increment(3)
        assert network.count_partitions() == 2

        network.reconnect(b)
        network.sync_all_replicas_to_server()
        # A synced before B's increment reached the server.
        assert network.count_partitions() == 2
        assert a_counter.query() == 16

        network.sync_with_server(a)
        assert network.count_partitions() == 1
        assert a_counter.query() == 19

        network.sync_all_replicas_to_server()
        assert network.count_partitions() == 1
        assert a_counter.query() == 19


class TestPNCounterPeerToPeer:

    def test_partition_with_decrements(self):
        network = PeerToPeerNetwork()
        a_counter, b_counter, c_counter = PNCounter("A"), PNCounter("B"), PNCounter("C")
        a = network.add(a_counter)
        b = network.add(b_counter)
        network.add(c_counter)

        a_counter.increment(-1)
        b_counter.increment(2)
        c_counter.increment(3)
        assert network.values() == {"A": -1, "B": 2, "C": 3}
        assert network.count_partitions() == 3

        network.broadcast(a)
        assert network.count_partitions() == 3

        network.broadcast_all()
        assert network.values() == {"A": 4, "B": 4, "C": 4}
        assert network.count_partitions() == 1

        network.disconnect(b)
        a_counter.increment(10)
        assert a_counter.query() == 14

        network.broadcast_all()
        assert network.values() == {"A": 14, "B": 4, "C": 14}
        assert network.count_partitions() == 2

        b_counter.increment(-3)
        assert network.count_partitions() == 2

        network.reconnect(b)
        network.broadcast_all()
        assert network.values() == {"A": 11, "B": 11, "C": 11}
        assert network.count_partitions() == 1

        b_counter.increment(-12)
        network.broadcast(b)
        assert network.values() == {"A": -1, "B": -1, "C": -1}
        assert network.count_partitions() == 1


class TestConvergenceProperties:
    """Randomized checks of convergence and isolation."""

    @pytest.mark.parametrize("seed", range(5))
    def test_one_broadcast_all_converges_mesh(self, seed):
        rng = random.Random(seed)
        network = PeerToPeerNetwork()
        counters = [PNCounter(f"R{i}") for i in range(rng.randint(2, 6))]
        for counter in counters:
            network.add(counter)
            for _ in range(rng.randint(0, 4)):
                counter.increment(rng.randint(-10, 10))
        expected = sum(c.increments - c.decrements for c in counters)

        network.broadcast_all()

        assert network.count_partitions() == 1
        assert counters[0].query() == expected

    @pytest.mark.parametrize("seed", range(5))
    def test_two_sync_rounds_converge_star(self, seed):
        rng = random.Random(seed)
        network = StarNetwork()
        network.set_server_replica(GCounter("SERVER"))
        counters = [GCounter(f"R{i}") for i in range(rng.randint(1, 6))]
        for counter in counters:
            network.add(counter)
            counter.increment(rng.randint(0, 10))
        expected = sum(c.query() for c in counters)

        network.sync_all_replicas_to_server()
        network.sync_all_replicas_to_server()

        assert network.count_partitions() == 1
        assert network.server.query() == expected

    @pytest.mark.parametrize("seed", range(5))
    def test_offline_replica_never_changes(self, seed):
        rng = random.Random(seed)
        mesh = PeerToPeerNetwork()
        star = StarNetwork()
        star.set_server_replica(GCounter("SERVER"))
        mesh_counters = [GCounter(f"M{i}") for i in range(4)]
        star_counters = [GCounter(f"S{i}") for i in range(4)]
        for m, s in zip(mesh_counters, star_counters):
            mesh.add(m)
            star.add(s)
            m.increment(rng.randint(1, 5))
            s.increment(rng.randint(1, 5))

        mesh.disconnect(2)
        star.disconnect(3)
        isolated_mesh = mesh_counters[2].counts
        isolated_star = star_counters[2].counts

        for _ in range(10):
            mesh_counters[rng.choice([0, 1, 3])].increment(rng.randint(0, 3))
            mesh.broadcast(rng.randrange(4))
            star.sync_with_server(rng.randrange(1, 5))
        mesh.broadcast_all()
        star.sync_all_replicas_to_server()

        assert mesh_counters[2].counts == isolated_mesh
        assert star_counters[2].counts == isolated_star

    def test_values_never_decrease(self):
        rng = random.Random(7)
        network = PeerToPeerNetwork()
        counters = [GCounter(f"R{i}") for i in range(3)]
        for counter in counters:
            network.add(counter)

        previous = network.values()
        for _ in range(30):
            action = rng.random()
            if action < 0.4:
                rng.choice(counters).increment(rng.randint(0, 4))
            elif action < 0.7:
                network.broadcast(rng.randrange(3))
            elif action < 0.85:
                network.disconnect(rng.randrange(3))
            else:
                network.reconnect(rng.randrange(3))
            current = network.values()
            assert all(current[name] >= previous[name] for name in current)
            previous = current
