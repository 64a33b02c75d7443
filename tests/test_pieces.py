import unittest

import numpy as np

from bombtris.game import EMPTY, Piece, SpecialBlock, TetrominoType, rotate_matrix
from bombtris.game.pieces import BASE_SHAPES, base_shape, is_special


class TestCatalog(unittest.TestCase):

    def test_shapes_are_square_with_four_cells(self):
        for kind, shape in BASE_SHAPES.items():
            h, w = shape.shape
            self.assertEqual(h, w, kind.name)
            self.assertEqual(int(np.count_nonzero(shape)), 4, kind.name)
            self.assertTrue(np.all(shape[shape != EMPTY] == int(kind)), kind.name)

    def test_catalog_hands_out_copies(self):
        shape = base_shape(TetrominoType.T)
        shape[:] = 9
        self.assertEqual(int(np.count_nonzero(BASE_SHAPES[TetrominoType.T])), 4)

    def test_block_id_ranges(self):
        self.assertFalse(any(is_special(int(k)) for k in TetrominoType))
        self.assertTrue(all(is_special(int(k)) for k in SpecialBlock))
        self.assertFalse(is_special(EMPTY))


class TestRotation(unittest.TestCase):

    def test_t_clockwise(self):
        rotated = rotate_matrix(BASE_SHAPES[TetrominoType.T], 1)
        np.testing.assert_array_equal(rotated, [[0, 1, 0], [1, 1, 0], [0, 1, 0]])

    def test_t_counter_clockwise(self):
        rotated = rotate_matrix(BASE_SHAPES[TetrominoType.T], -1)
        np.testing.assert_array_equal(rotated, [[0, 1, 0], [0, 1, 1], [0, 1, 0]])

    def test_four_turns_is_identity(self):
        for kind, shape in BASE_SHAPES.items():
            for direction in (1, -1):
                m = shape
                for _ in range(4):
                    m = rotate_matrix(m, direction)
                np.testing.assert_array_equal(m, shape, err_msg=f"{kind.name} dir={direction}")

    def test_opposite_turns_cancel(self):
        for shape in BASE_SHAPES.values():
            np.testing.assert_array_equal(rotate_matrix(rotate_matrix(shape, 1), -1), shape)

    def test_input_not_mutated(self):
        original = BASE_SHAPES[TetrominoType.L].copy()
        rotate_matrix(BASE_SHAPES[TetrominoType.L], 1)
        np.testing.assert_array_equal(BASE_SHAPES[TetrominoType.L], original)

    def test_special_cell_rotates_with_piece(self):
        piece = Piece(TetrominoType.O, np.array([[2, 8], [2, 2]], dtype=np.int8))
        rotated = piece.rotated(1)
        np.testing.assert_array_equal(rotated.matrix, [[2, 2], [2, 8]])
        np.testing.assert_array_equal(piece.matrix, [[2, 8], [2, 2]])


class TestPiece(unittest.TestCase):

    def test_cells_row_major(self):
        piece = Piece.spawn(TetrominoType.S)
        self.assertEqual(piece.cells(), [(1, 0, 6), (2, 0, 6), (0, 1, 6), (1, 1, 6)])


if __name__ == '__main__':
    unittest.main()
