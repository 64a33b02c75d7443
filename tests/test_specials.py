import random
import unittest

import numpy as np

from bombtris.game import InvalidConfigError, Piece, SpecialBlock, SpecialConfig, SpecialSpawner, TetrominoType
from bombtris.game.specials import guaranteed_interval

from scripted_rng import ScriptedRng


B, L, E = SpecialBlock.BOMB, SpecialBlock.LASER, SpecialBlock.EXTRUDER


class TestSpecialConfig(unittest.TestCase):

    def test_defaults(self):
        cfg = SpecialConfig()
        self.assertEqual(list(cfg.probabilities().values()), [0.25, 0.25, 0.25])
        self.assertEqual(list(cfg.probabilities()), [B, L, E])

    def test_out_of_range_probability(self):
        with self.assertRaises(InvalidConfigError):
            SpecialConfig(bomb_probability=1.5)
        with self.assertRaises(ValueError):
            SpecialConfig(extruder_probability=-0.1)

    def test_guaranteed_interval(self):
        self.assertEqual(guaranteed_interval(0.25), 4)
        self.assertEqual(guaranteed_interval(0.3), 4)
        self.assertEqual(guaranteed_interval(1.0), 1)
        self.assertIsNone(guaranteed_interval(0.0))


class TestSpawner(unittest.TestCase):

    def setUp(self):
        self.spawner = SpecialSpawner()

    def test_guaranteed_cycle_without_lucky_rolls(self):
        rng = ScriptedRng()
        picks = [self.spawner.choose(rng) for _ in range(11)]
        self.assertEqual(picks, [None, None, None, B, L, E, None, B, L, E, None])

    def test_random_roll_triggers_and_resets_counter(self):
        rng = ScriptedRng(rolls=[0.1, 0.99, 0.99])
        self.assertEqual(self.spawner.choose(rng), B)
        self.assertEqual(self.spawner.pieces_since_bomb, 0)
        self.assertEqual(self.spawner.pieces_since_laser, 1)
        self.assertEqual(self.spawner.pieces_since_extruder, 1)

    def test_priority_laser_over_extruder(self):
        rng = ScriptedRng(rolls=[0.99, 0.1, 0.1])
        self.assertEqual(self.spawner.choose(rng), L)
        self.assertEqual(self.spawner.pieces_since_laser, 0)
        self.assertEqual(self.spawner.pieces_since_extruder, 1)

    def test_always_draws_three_rolls(self):
        rng = ScriptedRng(rolls=[0.0, 0.0, 0.0, 0.5])
        self.spawner.choose(rng)
        self.assertEqual(rng.rolls, [0.5])

    def test_zero_probability_disables(self):
        spawner = SpecialSpawner(SpecialConfig(0.0, 0.0, 0.0))
        rng = ScriptedRng(default_roll=0.0)
        self.assertTrue(all(spawner.choose(rng) is None for _ in range(50)))

    def test_certain_bomb(self):
        spawner = SpecialSpawner(SpecialConfig(1.0, 0.25, 0.25))
        rng = ScriptedRng()
        self.assertTrue(all(spawner.choose(rng) == B for _ in range(10)))

    def test_reset(self):
        rng = ScriptedRng()
        for _ in range(3):
            self.spawner.choose(rng)
        self.spawner.reset()
        self.assertEqual(self.spawner.pieces_since_bomb, 0)


class TestDecorate(unittest.TestCase):

    def test_single_special_cell(self):
        spawner = SpecialSpawner()
        rng = ScriptedRng(rolls=[0.0, 0.0, 0.0], choices=[2])
        piece = Piece.spawn(TetrominoType.O)
        self.assertEqual(spawner.decorate(piece, rng), B)
        np.testing.assert_array_equal(piece.matrix, [[2, 2], [8, 2]])

    def test_no_special_leaves_piece_alone(self):
        spawner = SpecialSpawner()
        piece = Piece.spawn(TetrominoType.Z)
        self.assertIsNone(spawner.decorate(piece, ScriptedRng()))
        np.testing.assert_array_equal(piece.matrix, Piece.spawn(TetrominoType.Z).matrix)

    def test_never_two_specials(self):
        spawner = SpecialSpawner(SpecialConfig(0.9, 0.9, 0.9))
        rng = random.Random(3)
        for _ in range(200):
            piece = Piece.spawn(rng.choice(list(TetrominoType)))
            spawner.decorate(piece, rng)
            self.assertLessEqual(int(np.count_nonzero(piece.matrix >= 8)), 1)

    def test_empty_piece_is_not_decorated(self):
        spawner = SpecialSpawner(SpecialConfig(1.0, 0.0, 0.0))
        piece = Piece(TetrominoType.O, np.zeros((2, 2), dtype=np.int8))
        self.assertIsNone(spawner.decorate(piece, ScriptedRng()))


if __name__ == '__main__':
    unittest.main()
