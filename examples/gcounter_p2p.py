"""G-Counter replicas in a peer-to-peer mesh.

Three replicas increment independently, gossip by broadcast, lose one
replica to a partition and converge again once it reconnects.

Run:
    python examples/gcounter_p2p.py
"""

from crdtsim import GCounter, PeerToPeerNetwork, configure_from_env, enable_console_logging


def main():
    if not configure_from_env():
        enable_console_logging()

    network = PeerToPeerNetwork()

    a_counter = GCounter("A")
    b_counter = GCounter("B")
    c_counter = GCounter("C")

    a = network.add(a_counter)
    b = network.add(b_counter)
    network.add(c_counter)
    print(network.dump())
    assert network.values() == {"A": 0, "B": 0, "C": 0}

    a_counter.increment(1)
    b_counter.increment(2)
    c_counter.increment(3)
    print(network.dump())
    assert network.count_partitions() == 3

    network.broadcast(a)  # a=1, b=3, c=4
    print(network.dump())
    assert network.values() == {"A": 1, "B": 3, "C": 4}
    assert network.count_partitions() == 3

    network.broadcast_all()  # everyone at 6
    print(network.dump())
    assert network.count_partitions() == 1

    network.disconnect(b)
    a_counter.increment(10)
    print(network.dump())

    network.broadcast_all()
    print(network.dump())
    assert network.values() == {"A": 16, "B": 6, "C": 16}
    assert network.count_partitions() == 2

    b_counter.increment(3)
    print(network.dump())
    assert network.count_partitions() == 2

    network.reconnect(b)
    network.broadcast_all()
    print(network.dump())
    assert network.count_partitions() == 1
    print(f"Final value: {a_counter.query()}")


if __name__ == "__main__":
    main()
