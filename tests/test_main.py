import unittest
import sys
import os
import io
import shutil
import tempfile
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cellmaze.core.complexity import MazeStats
from cellmaze.io.serializer import MazeSerializer
from cellmaze.main import main


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp(prefix="cellmaze_cli_")
        self.maze_file = os.path.join(self.out_dir, "cli.maze")

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def run_cli(self, *argv):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(list(argv))
        return code, buf.getvalue()

    def test_generate_then_solve(self):
        code, out = self.run_cli("generate", "--width", "8", "--height", "6",
                                 "--algo", "wilson", "--seed", "4", "--out", self.maze_file)
        self.assertEqual(code, 0)
        self.assertIn("47 passages", out)
        self.assertTrue(os.path.exists(self.maze_file))

        code, out = self.run_cli("solve", self.maze_file, "--algo", "astar")
        self.assertEqual(code, 0)
        self.assertIn("Path Length", out)

    def test_distance(self):
        self.run_cli("generate", "--width", "5", "--height", "5", "--seed", "1",
                     "--out", self.maze_file, "--seed-only")
        code, out = self.run_cli("distance", self.maze_file)
        self.assertEqual(code, 0)
        self.assertIn("Reachable: 25/25", out)

    def test_animated_solve_without_file(self):
        code, out = self.run_cli("solve", "--width", "4", "--height", "4", "--seed", "3",
                                 "--animate", "--delay", "0")
        self.assertEqual(code, 0)
        self.assertIn("Path Length", out)

    def test_seed_only_without_seed_picks_one(self):
        code, _ = self.run_cli("generate", "--width", "4", "--height", "4",
                               "--out", self.maze_file, "--seed-only")
        self.assertEqual(code, 0)

        grid, meta = MazeSerializer.load(self.maze_file)
        self.assertIsInstance(meta["seed"], int)
        self.assertTrue(MazeStats.is_perfect(grid))

        code, out = self.run_cli("distance", self.maze_file)
        self.assertEqual(code, 0)
        self.assertIn("Reachable: 16/16", out)

    def test_negative_dimensions_exit_with_error(self):
        for command in ("generate", "solve"):
            with self.subTest(command=command):
                with self.assertLogs("cellmaze", level="ERROR"):
                    code, _ = self.run_cli(command, "--width", "-3")
                self.assertEqual(code, 2)

    def test_no_command(self):
        code, _ = self.run_cli()
        self.assertEqual(code, 0)


if __name__ == '__main__':
    unittest.main()
