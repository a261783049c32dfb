import platform
import re
import socket
import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from cicd_demo import snapshot  # noqa: E402
from cicd_demo.config import ServerConfig  # noqa: E402
from cicd_demo.snapshot import collect_snapshot, format_megabytes, iso_timestamp, memory_totals  # noqa: E402

ISO_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TimestampTests(unittest.TestCase):
    def test_matches_javascript_iso_format(self):
        moment = datetime(2026, 1, 2, 3, 4, 5, 678900, tzinfo=timezone.utc)
        self.assertEqual(iso_timestamp(moment), "2026-01-02T03:04:05.678Z")

    def test_current_time_is_utc(self):
        self.assertRegex(iso_timestamp(), ISO_PATTERN)


class MemoryTests(unittest.TestCase):
    def test_format_megabytes(self):
        self.assertEqual(format_megabytes(2048), "2048 MB")

    def test_live_totals_are_consistent(self):
        total, free = memory_totals()
        self.assertGreater(total, 0)
        self.assertGreaterEqual(free, 0)
        self.assertLessEqual(free, total)

    def test_sysconf_used_without_meminfo(self):
        with mock.patch.object(snapshot.os, "sysconf", side_effect=lambda name: {
            "SC_PAGE_SIZE": 4096,
            "SC_PHYS_PAGES": 524288,
            "SC_AVPHYS_PAGES": 262144,
        }[name]):
            total, free = memory_totals(Path("/nonexistent/meminfo"))
        self.assertEqual((total, free), (2048, 1024))


def test_meminfo_prefers_available_memory(tmp_path):
    meminfo = tmp_path / "meminfo"
    meminfo.write_text(
        "MemTotal:        8192000 kB\n"
        "MemFree:          512000 kB\n"
        "MemAvailable:    4096000 kB\n"
        "HugePages_Total:       0\n",
        encoding="utf-8",
    )
    assert memory_totals(meminfo) == (8000, 4000)


def test_meminfo_falls_back_to_free_memory(tmp_path):
    meminfo = tmp_path / "meminfo"
    meminfo.write_text("MemTotal: 1024000 kB\nMemFree: 256000 kB\n", encoding="utf-8")
    assert memory_totals(meminfo) == (1000, 250)


def test_collect_snapshot_reports_host_and_runtime():
    info = collect_snapshot(ServerConfig())
    assert info.hostname == socket.gethostname()
    assert info.platform == sys.platform
    assert platform.python_version() in info.runtime
    assert info.uptime >= 0
    assert ISO_PATTERN.match(info.timestamp)
    assert info.memory_free_mb <= info.memory_total_mb


if __name__ == "__main__":
    unittest.main()
