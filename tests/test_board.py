# -*-  coding: utf-8 -*-
"""
Set of test for Grid.
"""
from unittest import TestCase, main

import numpy as np

from game2048.core.grid import Grid
from game2048.core.rowprocess import process_row
from game2048.core.tile import Direction, Position, build_tile
from game2048.errors import GridInvariantError, InvalidStateError


class TestGrid(TestCase):
    """
    Test for the Grid class.
    This class tests the cell matrix, its line layout and its single cell mutations.
    """

    def setUp(self):
        """Initialize a new grid before each test."""
        self.grid = Grid.create(4)

    def test_create(self):
        """Test if the grid is created with every cell vacant."""
        self.assertEqual(self.grid.size, 4)
        self.assertEqual(self.grid.cells.shape, (4, 4))
        self.assertEqual(np.count_nonzero(self.grid.cells), 0)

    def test_invalid_size(self):
        """Test that a grid needs at least one cell."""
        with self.assertRaises(ValueError):
            Grid(0)

    def test_available_cells_row_major(self):
        """Test that vacant cells are listed in row-major order."""
        grid = Grid.from_cells([[2, 0], [0, 4]])
        self.assertEqual(grid.available_cells(), [Position(0, 1), Position(1, 0)])
        self.assertEqual(len(self.grid.available_cells()), 16)
        self.assertEqual(self.grid.available_cells()[:2], [Position(0, 0), Position(0, 1)])

    def test_occupied_tiles_row_major(self):
        """Test that tiles are listed in row-major order."""
        grid = Grid.from_cells([[0, 8], [2, 0]])
        self.assertEqual(list(grid.occupied_tiles()), [build_tile(0, 1, 8), build_tile(1, 0, 2)])

    def test_from_cells_rejects_invalid_values(self):
        """Test that only vacant cells and powers of two are accepted."""
        with self.assertRaises(ValueError):
            Grid.from_cells([[3, 0], [0, 0]])
        with self.assertRaises(ValueError):
            Grid.from_cells([[2, 0, 0], [0, 0, 0]])

    def test_row_data_left_and_right(self):
        """Test that left and right moves traverse rows from the destination edge."""
        grid = Grid(2)
        self.assertEqual(
            grid.get_row_data_by_direction(Direction.LEFT),
            [[Position(0, 0), Position(0, 1)], [Position(1, 0), Position(1, 1)]],
        )
        self.assertEqual(
            grid.get_row_data_by_direction(Direction.RIGHT),
            [[Position(1, 1), Position(1, 0)], [Position(0, 1), Position(0, 0)]],
        )

    def test_row_data_up_and_down(self):
        """Test that up and down moves traverse columns from the destination edge."""
        grid = Grid(2)
        self.assertEqual(
            grid.get_row_data_by_direction(Direction.UP),
            [[Position(0, 1), Position(1, 1)], [Position(0, 0), Position(1, 0)]],
        )
        self.assertEqual(
            grid.get_row_data_by_direction(Direction.DOWN),
            [[Position(1, 0), Position(0, 0)], [Position(1, 1), Position(0, 1)]],
        )

    def test_row_data_covers_every_cell(self):
        """Test that each direction lays out every cell exactly once."""
        for direction in Direction:
            rows = self.grid.get_row_data_by_direction(direction)
            self.assertEqual(len(rows), 4)
            positions = [pos for row in rows for pos in row]
            self.assertEqual(len(set(positions)), 16)

    def test_single_cell_mutations(self):
        """Test update, removal and insertion of a single cell."""
        self.grid.update_tile_by_pos(Position(1, 2), 8)
        self.assertEqual(self.grid.value_at(Position(1, 2)), 8)

        self.grid.remove_tile_by_pos(Position(1, 2))
        self.assertEqual(self.grid.value_at(Position(1, 2)), 0)

        self.grid.insert_tile_by_pos(build_tile(3, 3, 2), 2)
        self.assertEqual(self.grid.cells[3, 3], 2)

    def test_insert_into_occupied_cell(self):
        """Test that two tiles can never be inserted into the same cell."""
        tile = build_tile(0, 0, 2)
        self.grid.insert_tile_by_pos(tile, 2)
        with self.assertRaises(GridInvariantError):
            self.grid.insert_tile_by_pos(tile, 2)

    def test_out_of_range_position(self):
        """Test that positions outside of the grid are rejected."""
        for pos in (Position(4, 0), Position(0, 4), Position(-1, 0)):
            with self.assertRaises(IndexError):
                self.grid.update_tile_by_pos(pos, 2)
        with self.assertRaises(IndexError):
            self.grid.value_at(Position(0, 7))

    def test_invalid_value(self):
        """Test that a cell only holds 0 or a power of two."""
        with self.assertRaises(ValueError):
            self.grid.update_tile_by_pos(Position(0, 0), 6)

    def test_copy_is_independent(self):
        """Test that a copy does not share the matrix."""
        copy = self.grid.copy()
        copy.update_tile_by_pos(Position(0, 0), 2)
        self.assertEqual(self.grid.value_at(Position(0, 0)), 0)
        self.assertNotEqual(copy, self.grid)

    def test_cells_is_a_copy(self):
        """Test that the exposed matrix cannot mutate the grid."""
        cells = self.grid.cells
        cells[0, 0] = 2
        self.assertEqual(self.grid.value_at(Position(0, 0)), 0)

    def test_possible_moves(self):
        """Test the pure move queries."""
        blocked = Grid.from_cells([[2, 4], [4, 2]])
        self.assertFalse(blocked.has_possible_moves())
        self.assertFalse(any(blocked.can_move(direction) for direction in Direction))

        vertical = Grid.from_cells([[2, 4], [2, 8]])
        self.assertTrue(vertical.has_possible_moves())
        self.assertFalse(vertical.can_move(Direction.LEFT))
        self.assertTrue(vertical.can_move(Direction.UP))

    def test_can_move_follows_direction(self):
        """Test that each direction only looks toward its own destination edge."""
        grid = Grid.from_cells([[0, 2], [0, 0]])
        self.assertTrue(grid.can_move(Direction.LEFT))
        self.assertTrue(grid.can_move(Direction.DOWN))
        self.assertFalse(grid.can_move(Direction.RIGHT))
        self.assertFalse(grid.can_move(Direction.UP))

    def test_can_move_matches_row_processing(self):
        """Test that the move query agrees with the line events of every direction."""
        generator = np.random.default_rng(7)
        for _ in range(200):
            cells = generator.choice([0, 2, 4, 8], size=(3, 3))
            grid = Grid.from_cells(cells.tolist())
            for direction in Direction:
                changes = any(
                    process_row(grid.row_values(row)) for row in grid.get_row_data_by_direction(direction)
                )
                self.assertEqual(grid.can_move(direction), changes)

    def test_can_move_does_not_mutate(self):
        """Test that querying every direction leaves the grid unchanged."""
        grid = Grid.from_cells([[2, 2], [0, 4]])
        for direction in Direction:
            grid.can_move(direction)
        self.assertEqual(grid, Grid.from_cells([[2, 2], [0, 4]]))

    def test_render(self):
        """Test the text rendering of the grid."""
        grid = Grid.from_cells([[2, 0], [0, 4]])
        self.assertEqual(grid.render(), '2 \t0\n0 \t4')


class TestGridSerialization(TestCase):
    """
    Test for the compact encoding of the grid.
    """

    def test_serialize(self):
        """Test the serialized form."""
        grid = Grid.from_cells([[2, 0], [0, 4]])
        self.assertEqual(grid.serialize(), '2:2,0,0,4')

    def test_round_trip(self):
        """Test that decoding the encoding reproduces the grid."""
        generator = np.random.default_rng(42)
        for size in (1, 2, 4, 6):
            cells = generator.choice([0, 2, 4, 8, 1024, 131072], size=(size, size))
            grid = Grid.from_cells(cells.tolist())
            restored = Grid.deserialize(grid.serialize())
            self.assertEqual(restored, grid)
            np.testing.assert_array_equal(restored.cells, cells)

    def test_malformed_input(self):
        """Test that malformed encodings fail instead of building a partial grid."""
        for text in ('', 'garbage', '2:2,0,0', '2:2,0,0,3', '2:a,b,c,d', '0:', '-1:2', '2:2,0,0,-2', '2;2,0,0,4'):
            with self.subTest(text=text):
                with self.assertRaises(InvalidStateError):
                    Grid.deserialize(text)

    def test_non_string_input(self):
        """Test that only strings are decoded."""
        with self.assertRaises(InvalidStateError):
            Grid.deserialize(42)


if __name__ == "__main__":
    main()
