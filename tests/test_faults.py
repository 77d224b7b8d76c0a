"""Tests for open/short classification."""

import math

from conftest import make_grid
from faults import classify, mark_faulted
from network import build_network


class TestClassify:
    def test_series_loop_is_one_subgraph(self, series_loop):
        partition = classify(build_network(series_loop))
        assert len(partition.subgraphs) == 1
        assert partition.open_branches == []
        assert len(partition.subgraphs[0].batteries) == 1

    def test_loop_without_battery_is_open(self):
        grid = make_grid(
            "+R+",
            "|.|",
            "+R+",
        )
        partition = classify(build_network(grid))
        assert partition.subgraphs == []
        assert sorted(b.cell for b in partition.open_branches) == [(0, 1), (2, 1)]

    def test_dangling_resistor_is_open(self):
        grid = make_grid(
            "+B+",
            "|.|",
            "+-+R",
        )
        partition = classify(build_network(grid))
        assert [b.cell for b in partition.open_branches] == [(2, 3)]

    def test_separate_loops_are_separate_subgraphs(self):
        grid = make_grid(
            "+B+.+B+",
            "|.|.|.|",
            "+R+.+R+",
        )
        partition = classify(build_network(grid))
        assert len(partition.subgraphs) == 2
        assert partition.subgraphs[0].nodes.isdisjoint(partition.subgraphs[1].nodes)

    def test_ground_is_lowest_battery_node(self, parallel_loads):
        partition = classify(build_network(parallel_loads))
        subgraph = partition.subgraphs[0]
        battery = subgraph.batteries[0]
        assert subgraph.ground == min(battery.a, battery.b)


class TestMarkFaulted:
    def test_marks_loop_parts_and_wires(self, shorted_loop):
        network = build_network(shorted_loop)
        partition = classify(network)
        cells = mark_faulted(network, partition.subgraphs[0], shorted_loop)
        assert len(cells) == 8
        for cell in cells:
            assert math.isnan(shorted_loop[cell].current)

    def test_leaves_other_loops_alone(self):
        grid = make_grid(
            "+B+.+B+",
            "|.|.|.|",
            "+R+.+-+",
        )
        network = build_network(grid)
        partition = classify(network)
        mark_faulted(network, partition.subgraphs[1], grid)
        assert math.isnan(grid[0, 5].current)
        assert grid[0, 1].current == 0.0
        assert grid[2, 1].current == 0.0
