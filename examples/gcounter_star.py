"""G-Counter replicas synchronizing through a central server.

The server starts down, so clients diverge. Once it is back, it takes
two rounds of client syncs before every client has seen every update:
early clients sync before the server has heard from later ones.

Run:
    python examples/gcounter_star.py
"""

from crdtsim import GCounter, StarNetwork, configure_from_env, enable_console_logging


def main():
    if not configure_from_env():
        enable_console_logging()

    network = StarNetwork()

    server_counter = GCounter("SERVER")
    a_counter = GCounter("A")
    b_counter = GCounter("B")
    c_counter = GCounter("C")

    server = network.set_server_replica(server_counter)
    a = network.add(a_counter)
    b = network.add(b_counter)
    network.add(c_counter)
    network.disconnect(server)
    print(network.dump())

    a_counter.increment(1)
    b_counter.increment(2)
    c_counter.increment(3)
    print(network.dump())
    assert network.count_partitions() == 4

    network.sync_with_server(a)
    print(network.dump())
    assert network.count_partitions() == 4  # server is down

    network.reconnect(server)
    network.sync_all_replicas_to_server()
    print(network.dump())
    assert network.count_partitions() == 3  # only SERVER and C have seen everything

    network.sync_all_replicas_to_server()
    print(network.dump())
    assert network.count_partitions() == 1

    network.disconnect(b)
    a_counter.increment(10)
    print(network.dump())

    network.sync_all_replicas_to_server()
    print(network.dump())
    assert network.values() == {"SERVER": 16, "A": 16, "B": 6, "C": 16}
    assert network.count_partitions() == 2

    b_counter.increment(3)
    print(network.dump())
    assert network.count_partitions() == 2

    network.reconnect(b)
    network.sync_all_replicas_to_server()
    print(network.dump())
    assert network.count_partitions() == 2  # A synced before B's increment reached the server

    network.sync_with_server(a)
    print(network.dump())
    assert network.count_partitions() == 1
    assert a_counter.query() == 19

    network.sync_all_replicas_to_server()
    print(network.dump())
    assert a_counter.query() == 19
    print(f"Final value: {a_counter.query()}")


if __name__ == "__main__":
    main()
