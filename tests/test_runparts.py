#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Functional test-suite for *runparts*.

• Name resolution: precedence, filters, ordering and limits.
• Streaming: concatenated reads, lazy read state and close semantics.
• The fixture tree is built once per class by tools/build_fixtures.py.
"""
from __future__ import annotations

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from typing import List

# Dynamically ensure the src/ layout is importable
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

import runparts  # noqa: E402
from runparts import (  # noqa: E402
    DEFAULT_MODE_PERM_FILTER,
    DEFAULT_MODE_TYPE_FILTER,
    DEFAULT_REGEXP_FILTER,
    EXECUTABLE_MODE_PERM_FILTER,
    EXECUTABLE_MODE_TYPE_FILTER,
    MODE_DIR,
    MODE_PERM,
    MODE_SYMLINK,
    MODE_TYPE,
    ConfigurationError,
    Parts,
    PathAccessError,
    lstat_mode,
    new_config,
    stat_mode,
)

TOOLS_DIR = Path(__file__).resolve().parent / "tools"
BUILD_SCRIPT = TOOLS_DIR / "build_fixtures.py"

# Fixture-relative expectations, in run-parts order.
ALL_FILES = [
    "etc/10-both.conf",
    "usr/lib/10-executable.sh",
    "etc/10-only-etc.conf",
    "usr/lib/10-only-lib.conf",
    "etc/20-only-etc.conf",
    "usr/lib/20-only-lib.conf",
    "etc/30-symlink.conf",
    "usr/lib/40-noconf",
    "usr/lib/adir",
    "usr/lib/nodigits.conf",
    "test.conf",
]
DEFAULT_FILES = [f for f in ALL_FILES if f != "usr/lib/adir"]
EXECUTABLES = ["usr/lib/10-executable.sh"]
DIRECTORIES = ["usr/lib/adir"]
CONFIG_FILES = [f for f in DEFAULT_FILES if f.endswith(".conf")]
SYMLINK = "etc/30-symlink.conf"


class FixtureTestCase(unittest.TestCase):
    """Builds the run-parts fixture tree into a temporary directory."""

    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = tempfile.TemporaryDirectory()
        cls.root = Path(cls._tmp.name) / "testdata"
        subprocess.check_call([sys.executable, str(BUILD_SCRIPT), str(cls.root)], stdout=subprocess.DEVNULL)
        cls.paths = [str(cls.root / "test.conf"), str(cls.root / "etc"), str(cls.root / "usr" / "lib")]

    @classmethod
    def tearDownClass(cls) -> None:
        cls._tmp.cleanup()

    def fx(self, rel: str) -> str:
        """Absolute fixture path for a root-relative name."""
        return os.path.join(str(self.root), *rel.split("/"))

    def fxs(self, rels: List[str]) -> List[str]:
        return [self.fx(r) for r in rels]


# --------------------------------------------------------------------------- #
#  1. Name resolution                                                         #
# --------------------------------------------------------------------------- #
class ReaddirnamesTests(FixtureTestCase):
    def test_all_types(self) -> None:
        cfg = new_config(False, MODE_TYPE, MODE_PERM, DEFAULT_REGEXP_FILTER)
        names = Parts(self.paths, cfg).readdirnames(0)
        self.assertEqual(self.fxs(ALL_FILES), names)

    def test_limit_returns_prefix(self) -> None:
        cfg = new_config(False, MODE_TYPE, MODE_PERM, DEFAULT_REGEXP_FILTER)
        parts = Parts(self.paths, cfg)
        self.assertEqual(self.fxs(ALL_FILES[:5]), parts.readdirnames(5))

    def test_limit_at_or_above_length_returns_everything(self) -> None:
        cfg = new_config(False, MODE_TYPE, MODE_PERM, DEFAULT_REGEXP_FILTER)
        parts = Parts(self.paths, cfg)
        full = parts.readdirnames(0)
        self.assertEqual(full, parts.readdirnames(len(full)))
        self.assertEqual(full, parts.readdirnames(len(full) + 10))

    def test_reverse(self) -> None:
        cfg = new_config(True, MODE_TYPE, MODE_PERM, DEFAULT_REGEXP_FILTER)
        names = Parts(self.paths, cfg).readdirnames(0)
        self.assertEqual(list(reversed(self.fxs(ALL_FILES))), names)

    def test_defaults(self) -> None:
        parts = Parts(self.paths)
        self.assertEqual(self.fxs(DEFAULT_FILES), parts.readdirnames())

    def test_default_config_matches_explicit_defaults(self) -> None:
        explicit = new_config(False, DEFAULT_MODE_TYPE_FILTER, DEFAULT_MODE_PERM_FILTER, DEFAULT_REGEXP_FILTER)
        self.assertEqual(
            Parts(self.paths, explicit).readdirnames(),
            Parts(self.paths, None).readdirnames(),
        )

    def test_executables(self) -> None:
        cfg = new_config(False, EXECUTABLE_MODE_TYPE_FILTER, EXECUTABLE_MODE_PERM_FILTER, DEFAULT_REGEXP_FILTER)
        self.assertEqual(self.fxs(EXECUTABLES), Parts(self.paths, cfg).readdirnames())

    def test_directories(self) -> None:
        cfg = new_config(False, MODE_DIR, MODE_PERM, DEFAULT_REGEXP_FILTER)
        self.assertEqual(self.fxs(DIRECTORIES), Parts(self.paths, cfg).readdirnames())

    def test_name_pattern(self) -> None:
        cfg = new_config(False, DEFAULT_MODE_TYPE_FILTER, DEFAULT_MODE_PERM_FILTER, r"\.conf$")
        self.assertEqual(self.fxs(CONFIG_FILES), Parts(self.paths, cfg).readdirnames())

    def test_pattern_not_applied_to_explicit_file(self) -> None:
        cfg = new_config(False, DEFAULT_MODE_TYPE_FILTER, DEFAULT_MODE_PERM_FILTER, r"^nothing-matches$")
        names = Parts(self.paths, cfg).readdirnames()
        self.assertEqual([self.fx("test.conf")], names)

    def test_earlier_path_wins(self) -> None:
        etc, lib = self.fx("etc"), self.fx("usr/lib")
        names = Parts([etc, lib]).readdirnames()
        self.assertIn(self.fx("etc/10-both.conf"), names)
        self.assertNotIn(self.fx("usr/lib/10-both.conf"), names)

        names = Parts([lib, etc]).readdirnames()
        self.assertIn(self.fx("usr/lib/10-both.conf"), names)
        self.assertNotIn(self.fx("etc/10-both.conf"), names)

    def test_explicit_file_shadows_directory_entry(self) -> None:
        lib_both = self.fx("usr/lib/10-both.conf")
        names = Parts([lib_both, self.fx("etc")]).readdirnames()
        self.assertIn(lib_both, names)
        self.assertNotIn(self.fx("etc/10-both.conf"), names)

    def test_no_duplicate_base_names(self) -> None:
        cfg = new_config(False, MODE_TYPE, MODE_PERM, DEFAULT_REGEXP_FILTER)
        names = Parts(self.paths + self.paths, cfg).readdirnames()
        bases = [os.path.basename(n) for n in names]
        self.assertEqual(len(bases), len(set(bases)))
        self.assertEqual(sorted(bases), bases)

    def test_resolution_is_recomputed(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            parts = Parts([td])
            self.assertEqual([], parts.readdirnames())
            Path(td, "50-late.conf").write_text("late\n", encoding="utf-8")
            self.assertEqual([os.path.join(td, "50-late.conf")], parts.readdirnames())

    def test_nonexistent_path_raises(self) -> None:
        parts = Parts([self.fx("etc"), "/notexist"])
        with self.assertRaises(PathAccessError) as ctx:
            parts.readdirnames()
        self.assertEqual("/notexist", ctx.exception.path)
        self.assertIsInstance(ctx.exception, OSError)

    def test_invalid_pattern(self) -> None:
        with self.assertRaises(ConfigurationError):
            new_config(False, DEFAULT_MODE_TYPE_FILTER, DEFAULT_MODE_PERM_FILTER, "([unclosed")


# --------------------------------------------------------------------------- #
#  2. Scenario with trailing separators                                       #
# --------------------------------------------------------------------------- #
class ScenarioTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        root = Path(self._tmp.name)
        for rel, mode in (
            ("etc/10-both.conf", 0o644),
            ("etc/20-only-etc.conf", 0o644),
            ("test.conf", 0o644),
            ("usr/lib/10-both.conf", 0o644),
            ("usr/lib/10-exec.sh", 0o755),
            ("usr/lib/40-noext", 0o644),
        ):
            fp = root / rel
            fp.parent.mkdir(parents=True, exist_ok=True)
            fp.write_text(rel + "\n", encoding="utf-8")
            fp.chmod(mode)
        self.root = str(root)
        self.paths = [
            os.path.join(self.root, "etc") + os.sep,
            os.path.join(self.root, "test.conf"),
            os.path.join(self.root, "usr", "lib") + os.sep,
        ]

    def test_conf_pattern_forward_and_reverse(self) -> None:
        expected = [
            os.path.join(self.root, "etc", "10-both.conf"),
            os.path.join(self.root, "etc", "20-only-etc.conf"),
            os.path.join(self.root, "test.conf"),
        ]
        forward = Parts(self.paths, new_config(regexp_filter=r"\.conf$")).readdirnames()
        self.assertEqual(expected, forward)
        backward = Parts(self.paths, new_config(reverse=True, regexp_filter=r"\.conf$")).readdirnames()
        self.assertEqual(list(reversed(expected)), backward)

    def test_streaming_equals_concatenation(self) -> None:
        parts = Parts(self.paths)
        names = parts.readdirnames()
        expected = b"".join(Path(n).read_bytes() for n in names)
        with parts:
            self.assertEqual(expected, parts.read())


# --------------------------------------------------------------------------- #
#  3. Streaming                                                               #
# --------------------------------------------------------------------------- #
class ReadTests(FixtureTestCase):
    def _conf_parts(self) -> Parts:
        cfg = new_config(False, DEFAULT_MODE_TYPE_FILTER, DEFAULT_MODE_PERM_FILTER, r"\.conf$")
        return Parts(self.paths, cfg)

    def _expected(self) -> bytes:
        return "".join(os.path.basename(f) + "\n" for f in CONFIG_FILES).encode()

    def test_read_in_small_chunks(self) -> None:
        parts = self._conf_parts()
        self.addCleanup(parts.close)
        buf = bytearray(8)
        out = bytearray()
        while True:
            n = parts.readinto(buf)
            if n == 0:
                break
            out += buf[:n]
        self.assertEqual(self._expected(), bytes(out))
        self.assertEqual(b"", parts.read(8))

    def test_readall(self) -> None:
        with self._conf_parts() as parts:
            data = parts.readall()
        self.assertTrue(data)
        self.assertEqual(self._expected(), data)

    def test_shadowed_content_is_not_streamed(self) -> None:
        with self._conf_parts() as parts:
            data = parts.read()
        self.assertNotIn(b"shadowed", data)

    def test_read_state_is_lazy_and_reset_by_close(self) -> None:
        parts = self._conf_parts()
        self.assertFalse(parts.reading)
        first = parts.read(4)
        self.assertTrue(parts.reading)
        parts.close()
        self.assertFalse(parts.reading)
        parts.close()
        self.assertEqual(first, parts.read(4))
        parts.close()

    def test_read_nonexistent(self) -> None:
        parts = Parts(["/notexist"])
        with self.assertRaises(PathAccessError):
            parts.read()
        self.assertFalse(parts.reading)
        parts.close()

    def test_unreadable_file_aborts_initialisation(self) -> None:
        if hasattr(os, "geteuid") and os.geteuid() == 0:
            self.skipTest("root ignores file permissions")
        with tempfile.TemporaryDirectory() as td:
            Path(td, "10-ok").write_text("ok\n", encoding="utf-8")
            locked = Path(td, "20-locked")
            locked.write_text("secret\n", encoding="utf-8")
            locked.chmod(0o200)
            parts = Parts([td])
            with self.assertRaises(PathAccessError):
                parts.read()
            self.assertFalse(parts.reading)


# --------------------------------------------------------------------------- #
#  4. Mode queries on disk                                                    #
# --------------------------------------------------------------------------- #
class StatModeTests(FixtureTestCase):
    def test_stat_mode(self) -> None:
        mode = stat_mode(self.fx(EXECUTABLES[0]))
        self.assertTrue(mode.is_executable())
        self.assertEqual("frwxr-xr-x", str(mode))

        self.assertTrue(stat_mode(self.fx(DIRECTORIES[0])).is_dir())
        self.assertTrue(stat_mode(self.fx(CONFIG_FILES[0])).is_regular())

    def test_lstat_mode_reports_symlink(self) -> None:
        link = self.fx(SYMLINK)
        self.assertTrue(lstat_mode(link) & MODE_SYMLINK)
        self.assertFalse(stat_mode(link) & MODE_SYMLINK)
        self.assertTrue(str(lstat_mode(link)).startswith("L"))

    def test_stat_mode_missing(self) -> None:
        with self.assertRaises(PathAccessError):
            stat_mode("/notexist")
        with self.assertRaises(PathAccessError):
            lstat_mode("/notexist")

    def test_public_surface(self) -> None:
        self.assertTrue(runparts.__version__)
        for name in runparts.__all__:
            self.assertTrue(hasattr(runparts, name), name)


if __name__ == "__main__":
    unittest.main(verbosity=2)
