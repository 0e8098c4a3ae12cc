"""Unit tests for the flow network primitives."""

import pytest

from circles_flow.graph.queue import Queue
from circles_flow.graph.flow_network import FlowEdge, FlowNetwork
from circles_flow.core.exceptions import InvalidTopologyError, ValidationError


class TestQueue:
    """Test FIFO queue behaviour."""

    def test_fifo_order(self):
        """Items come out in insertion order."""
        queue = Queue()
        for item in [3, 1, 2]:
            queue.enqueue(item)

        assert queue.to_list() == [3, 1, 2]
        assert [queue.dequeue(), queue.dequeue(), queue.dequeue()] == [3, 1, 2]

    def test_empty_queue(self):
        """Dequeue on an empty queue returns None."""
        queue = Queue()
        assert queue.is_empty()
        assert queue.size() == 0
        assert queue.dequeue() is None

    def test_size_tracking(self):
        """Size follows enqueue and dequeue."""
        queue = Queue()
        queue.enqueue('x')
        queue.enqueue('y')
        assert len(queue) == 2

        queue.dequeue()
        assert queue.size() == 1
        assert not queue.is_empty()


class TestFlowEdge:
    """Test residual capacity bookkeeping on a single edge."""

    def test_new_edge(self):
        """A new edge carries no flow."""
        edge = FlowEdge(0, 1, 10, 'owner')
        assert edge.flow == 0
        assert edge.commit_sequence is None
        assert edge.from_node() == 0
        assert edge.to_node() == 1

    def test_residual_capacity(self):
        """Forward residual is capacity minus flow, backward residual is flow."""
        edge = FlowEdge(0, 1, 10, 'owner')
        edge.add_residual_flow_to(1, 4)

        assert edge.flow == 4
        assert edge.residual_capacity_to(1) == 6
        assert edge.residual_capacity_to(0) == 4

    def test_flow_cancellation(self):
        """Pushing toward the tail cancels flow."""
        edge = FlowEdge(0, 1, 10, 'owner')
        edge.add_residual_flow_to(1, 7)
        edge.add_residual_flow_to(0, 5)

        assert edge.flow == 2
        assert edge.residual_capacity_to(1) == 8

    def test_other(self):
        """Other returns the opposite endpoint."""
        edge = FlowEdge(2, 5, 1, 'owner')
        assert edge.other(2) == 5
        assert edge.other(5) == 2

    def test_flow_stays_within_capacity(self):
        """Pushing exactly the residual capacity keeps 0 <= flow <= capacity."""
        edge = FlowEdge(0, 1, 3, 'owner')
        edge.add_residual_flow_to(1, edge.residual_capacity_to(1))
        assert edge.flow == edge.capacity

        edge.add_residual_flow_to(0, edge.residual_capacity_to(0))
        assert edge.flow == 0


class TestFlowNetwork:
    """Test network construction and adjacency."""

    def test_shared_edges(self):
        """One edge is visible from both endpoints and mutates once."""
        network = FlowNetwork(3)
        edge_id = network.add_edge(0, 1, 10, 'owner')

        from_tail = network.adjacency(0)[0]
        from_head = network.adjacency(1)[0]
        assert from_tail is from_head is network.edge(edge_id)

        from_tail.add_residual_flow_to(1, 6)
        assert from_head.flow == 6

    def test_adjacency_insertion_order(self):
        """Adjacency lists keep insertion order."""
        network = FlowNetwork(4)
        network.add_edge(0, 2, 1, 'x')
        network.add_edge(3, 0, 1, 'x')
        network.add_edge(0, 1, 1, 'x')

        assert [e.other(0) for e in network.adjacency(0)] == [2, 3, 1]
        assert network.E == 3

    def test_find_edge(self):
        """find_edge scans the adjacency of the first node."""
        network = FlowNetwork(3)
        network.add_edge(0, 1, 5, 'x')
        network.add_edge(2, 1, 7, 'x')

        assert network.find_edge(0, 1).capacity == 5
        assert network.find_edge(1, 2).capacity == 7
        assert network.find_edge(0, 2) is None

    def test_from_edges(self):
        """Networks can be built from edge tuples."""
        network = FlowNetwork.from_edges(3, [(0, 1, 'x', 4), (1, 2, 'y', 9)])

        assert network.V == 3
        assert [(e.v, e.w, e.token_owner, e.capacity) for e in network.edges()] == [
            (0, 1, 'x', 4),
            (1, 2, 'y', 9),
        ]

    def test_parallel_edges_for_different_tokens(self):
        """The same pair may be connected once per token owner."""
        network = FlowNetwork(2)
        network.add_edge(0, 1, 5, 'x')
        network.add_edge(0, 1, 5, 'y')
        assert network.E == 2

    def test_duplicate_edge_rejected(self):
        """A second edge with the same (from, to, token owner) is rejected."""
        network = FlowNetwork(2)
        network.add_edge(0, 1, 5, 'x')

        with pytest.raises(InvalidTopologyError) as exc_info:
            network.add_edge(0, 1, 8, 'x')
        assert "Duplicate edge" in str(exc_info.value)

    @pytest.mark.parametrize("v,w", [(-1, 0), (0, 3), (5, 1)])
    def test_out_of_range_index(self, v, w):
        """Indices outside 0..V-1 are rejected."""
        network = FlowNetwork(3)
        with pytest.raises(InvalidTopologyError):
            network.add_edge(v, w, 1, 'x')

    def test_self_loop_rejected(self):
        """Edges from a node to itself are rejected."""
        network = FlowNetwork(2)
        with pytest.raises(InvalidTopologyError):
            network.add_edge(1, 1, 1, 'x')

    @pytest.mark.parametrize("capacity", [-1, 1.5, float('inf'), '10', True])
    def test_bad_capacity(self, capacity):
        """Capacities must be non-negative integers."""
        network = FlowNetwork(2)
        with pytest.raises(InvalidTopologyError) as exc_info:
            network.add_edge(0, 1, capacity, 'x')
        assert exc_info.value.field == 'capacity'

    def test_topology_error_is_validation_error(self):
        """InvalidTopologyError belongs to the validation family."""
        with pytest.raises(ValidationError):
            FlowNetwork(0)

    def test_totals(self):
        """Inbound and outbound flow totals per node."""
        network = FlowNetwork(3)
        network.add_edge(0, 1, 5, 'x')
        network.add_edge(1, 2, 5, 'x')
        network.edge(0).add_residual_flow_to(1, 3)
        network.edge(1).add_residual_flow_to(2, 3)

        assert network.total_flow_into(1) == 3
        assert network.total_flow_out_of(1) == 3
        assert network.total_flow_into(0) == 0
