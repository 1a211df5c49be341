"""
Square grid of tiles.

The grid owns a ``size x size`` integer matrix where 0 marks a vacant cell and any other value is a power of two.
It is mutated one cell at a time by the game engine and knows how to lay its cells out as lines for each move
direction.
"""

from collections.abc import Iterator, Sequence

from numpy import arange, argwhere, array, array_equal, int64, ndarray, rot90, zeros

from game2048.core.tile import Direction, Position, Tile, build_tile, is_tile_value
from game2048.errors import GridInvariantError, InvalidStateError

# ##>: Separators of the serialized form "<size>:<v0>,<v1>,...".
_SIZE_SEPARATOR = ':'
_CELL_SEPARATOR = ','


class Grid:
    """
    Matrix of tile values.

    Parameters
    ----------
    size : int
        Side of the grid, at least 1.
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f'size must be >= 1, got {size}')
        self.size = size
        self._cells: ndarray = zeros((size, size), dtype=int64)

    @classmethod
    def create(cls, size: int) -> 'Grid':
        """Create a grid with all cells vacant."""
        return cls(size)

    @classmethod
    def from_cells(cls, rows: Sequence[Sequence[int]]) -> 'Grid':
        """
        Build a grid from nested rows of cell values.

        Parameters
        ----------
        rows : Sequence[Sequence[int]]
            Square matrix of values, 0 for vacant cells.

        Returns
        -------
        Grid
            A new grid holding a copy of the values.

        Raises
        ------
        ValueError
            If the matrix is not square or holds a value that is neither 0 nor a power of two.
        """
        matrix = array(rows, dtype=int64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] < 1:
            raise ValueError(f'cells must form a non-empty square matrix, got shape {matrix.shape}')

        invalid = [int(value) for value in matrix.ravel() if not is_tile_value(int(value))]
        if invalid:
            raise ValueError(f'cell values must be 0 or a power of two, got {invalid}')

        grid = cls(matrix.shape[0])
        grid._cells[:] = matrix
        return grid

    @property
    def cells(self) -> ndarray:
        """Copy of the cell matrix."""
        return self._cells.copy()

    def copy(self) -> 'Grid':
        """Independent copy of the grid."""
        grid = Grid(self.size)
        grid._cells[:] = self._cells
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f'Grid(size={self.size}, cells={self._cells.tolist()})'

    def _check_position(self, pos: Position) -> None:
        if not (0 <= pos.row_index < self.size and 0 <= pos.cell_index < self.size):
            raise IndexError(f'position {pos} is outside of a {self.size}x{self.size} grid')

    def value_at(self, pos: Position) -> int:
        """Value of the cell at ``pos``, 0 when vacant."""
        self._check_position(pos)
        return int(self._cells[pos.row_index, pos.cell_index])

    def available_cells(self) -> list[Position]:
        """
        Vacant positions.

        Returns
        -------
        list[Position]
            Vacant cells in row-major order.
        """
        return [Position(int(row), int(cell)) for row, cell in argwhere(self._cells == 0)]

    def occupied_tiles(self) -> Iterator[Tile]:
        """Yield the tiles on the grid in row-major order."""
        for row, cell in argwhere(self._cells != 0):
            yield build_tile(int(row), int(cell), int(self._cells[row, cell]))

    def get_row_data_by_direction(self, direction: Direction) -> list[list[Position]]:
        """
        Lay the grid out as lines for a move.

        Parameters
        ----------
        direction : Direction
            Direction of the move.

        Returns
        -------
        list[list[Position]]
            ``size`` lines of positions. Index 0 of each line is on the edge the tiles move toward.

        Notes
        -----
        - Left and right traverse rows, up and down traverse columns.
        - The lines are the rows of the position index matrix rotated by ``direction`` quarter turns.
        """
        indices = rot90(arange(self.size * self.size).reshape(self.size, self.size), k=int(direction))
        return [[Position(*divmod(int(index), self.size)) for index in line] for line in indices]

    def row_values(self, row: Sequence[Position]) -> list[int]:
        """Values of the cells of a line."""
        return [self.value_at(pos) for pos in row]

    def update_tile_by_pos(self, pos: Position, value: int) -> None:
        """
        Set the value of a cell.

        Raises
        ------
        IndexError
            If the position is outside of the grid.
        ValueError
            If the value is neither 0 nor a power of two.
        """
        self._check_position(pos)
        if not is_tile_value(value):
            raise ValueError(f'cell value must be 0 or a power of two, got {value}')
        self._cells[pos.row_index, pos.cell_index] = value

    def remove_tile_by_pos(self, pos: Position) -> None:
        """Vacate a cell."""
        self.update_tile_by_pos(pos, 0)

    def insert_tile_by_pos(self, tile: Tile, value: int) -> None:
        """
        Place a new tile into a vacant cell.

        Raises
        ------
        GridInvariantError
            If the cell is already occupied.
        """
        pos = tile.position
        if self.value_at(pos):
            raise GridInvariantError(f'cannot insert a tile into occupied cell {pos}')
        self.update_tile_by_pos(pos, value)

    def clear(self) -> None:
        """Vacate every cell."""
        self._cells[:] = 0

    def can_move(self, direction: Direction) -> bool:
        """
        Check, without mutating the grid, whether a move in ``direction`` changes it.

        Notes
        -----
        The matrix is rotated like the lines of `get_row_data_by_direction`, so the move becomes a slide toward
        column 0. It changes the grid when a tile has a vacant cell on that side or an equal neighbour.
        """
        rotated = rot90(self._cells, k=int(direction))
        near, far = rotated[:, :-1], rotated[:, 1:]

        can_slide = (near == 0) & (far != 0)
        can_merge = (near != 0) & (near == far)
        return bool(can_slide.any() or can_merge.any())

    def has_possible_moves(self) -> bool:
        """Check whether any direction changes the grid."""
        return any(self.can_move(direction) for direction in Direction)

    def serialize(self) -> str:
        """
        Encode the grid as a compact string.

        Returns
        -------
        str
            ``"<size>:<v0>,<v1>,..."`` with the cell values in row-major order.
        """
        values = _CELL_SEPARATOR.join(str(value) for value in self._cells.ravel().tolist())
        return f'{self.size}{_SIZE_SEPARATOR}{values}'

    @classmethod
    def deserialize(cls, text: str) -> 'Grid':
        """
        Decode a grid produced by `serialize`.

        Parameters
        ----------
        text : str
            The serialized grid.

        Returns
        -------
        Grid
            The decoded grid.

        Raises
        ------
        InvalidStateError
            If the text is malformed, the cell count does not match the size or a value is invalid.
        """
        if not isinstance(text, str):
            raise InvalidStateError(f'serialized grid must be a string, got {type(text).__name__}')

        size_text, separator, values_text = text.partition(_SIZE_SEPARATOR)
        if not separator:
            raise InvalidStateError(f'missing size separator in {text!r}')

        try:
            size = int(size_text)
            values = [int(value) for value in values_text.split(_CELL_SEPARATOR)]
        except ValueError as error:
            raise InvalidStateError(f'non-integer field in {text!r}') from error

        if size < 1 or len(values) != size * size:
            raise InvalidStateError(f'expected {size}x{size} cells, got {len(values)}')

        try:
            return cls.from_cells([values[row * size : (row + 1) * size] for row in range(size)])
        except (ValueError, OverflowError) as error:
            raise InvalidStateError(str(error)) from error

    def render(self) -> str:
        """Render the grid as tab separated rows."""
        return '\n'.join(' \t'.join(map(str, row)) for row in self._cells.tolist())
