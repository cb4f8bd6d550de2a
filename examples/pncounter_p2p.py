"""PN-Counter replicas in a peer-to-peer mesh.

Same partition story as the G-Counter mesh, with decrements. Values can
go negative and still converge.

Run:
    python examples/pncounter_p2p.py
"""

from crdtsim import PNCounter, PeerToPeerNetwork, configure_from_env, enable_console_logging


def main():
    if not configure_from_env():
        enable_console_logging()

    network = PeerToPeerNetwork()

    a_counter = PNCounter("A")
    b_counter = PNCounter("B")
    c_counter = PNCounter("C")

    a = network.add(a_counter)
    b = network.add(b_counter)
    network.add(c_counter)
    print(network.dump())

    a_counter.increment(-1)
    b_counter.increment(2)
    c_counter.increment(3)
    print(network.dump())
    assert network.values() == {"A": -1, "B": 2, "C": 3}
    assert network.count_partitions() == 3

    network.broadcast(a)
    print(network.dump())
    assert network.count_partitions() == 3

    network.broadcast_all()
    print(network.dump())
    assert network.count_partitions() == 1

    network.disconnect(b)
    a_counter.increment(10)
    print(network.dump())

    network.broadcast_all()
    print(network.dump())
    assert network.values() == {"A": 14, "B": 4, "C": 14}
    assert network.count_partitions() == 2

    b_counter.increment(-3)
    print(network.dump())
    assert network.count_partitions() == 2

    network.reconnect(b)
    network.broadcast_all()
    print(network.dump())
    assert network.count_partitions() == 1
    assert a_counter.query() == 11

    b_counter.increment(-12)
    network.broadcast(b)
    print(network.dump())
    assert network.count_partitions() == 1
    assert a_counter.query() == -1
    print(f"Final value: {a_counter.query()}")


if __name__ == "__main__":
    main()
