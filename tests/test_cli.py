# tests/test_cli.py
from __future__ import annotations

import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

from _posts import article_post, quoting, standard_post


def _run_cli(repo_root: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    existing_pp = env.get("PYTHONPATH", "")
    env["PYTHONPATH"] = (
        f"{repo_root}{os.pathsep}{existing_pp}" if existing_pp else str(repo_root)
    )
    return subprocess.run(
        [sys.executable, "-m", "xtract", *args],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )


def _events(log_path: Path) -> list[str]:
    events: list[str] = []
    for ln in log_path.read_text(encoding="utf-8").splitlines():
        if not ln.strip():
            continue
        try:
            obj = json.loads(ln)
        except Exception:
            continue
        ev = obj.get("event")
        if isinstance(ev, str):
            events.append(ev)
    return events


class TestTransformCommand(unittest.TestCase):
    def setUp(self) -> None:
        self.repo_root = Path(__file__).resolve().parents[1]

    def test_transform_envelope_prints_json_and_logs(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            post_path = Path(td) / "post.json"
            log_path = Path(td) / "run.log"
            envelope = {
                "data": {"tweetResult": {"result": quoting(standard_post("1"), article_post("2"))}}
            }
            post_path.write_text(json.dumps(envelope), encoding="utf-8")

            proc = _run_cli(
                self.repo_root,
                "transform",
                "--input",
                str(post_path),
                "--log",
                str(log_path),
            )

            self.assertEqual(proc.returncode, 0, msg=proc.stderr)
            out = json.loads(proc.stdout)
            self.assertEqual(out["id"], "1")
            self.assertEqual(out["type"], "post")
            self.assertEqual(out["textType"], "text")
            self.assertEqual(out["stats"]["views"], 1234)
            self.assertEqual(out["quotedPost"]["type"], "article")
            self.assertEqual(out["quotedPost"]["images"], ["http://x/cover.png", "http://x/i.png"])

            events = _events(log_path)
            self.assertIn("transform_command_started", events)
            self.assertIn("transform_completed", events)

    def test_malformed_post_exit_code(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            post_path = Path(td) / "post.json"
            log_path = Path(td) / "run.log"
            post_path.write_text(json.dumps({"rest_id": "1"}), encoding="utf-8")

            proc = _run_cli(
                self.repo_root,
                "transform",
                "--input",
                str(post_path),
                "--log",
                str(log_path),
            )

            self.assertEqual(proc.returncode, 3, msg=proc.stderr)
            self.assertIn("transform_command_failed", _events(log_path))

    def test_missing_config_exit_code(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            post_path = Path(td) / "post.json"
            post_path.write_text(json.dumps(standard_post()), encoding="utf-8")

            proc = _run_cli(
                self.repo_root,
                "transform",
                "--input",
                str(post_path),
                "--config",
                str(Path(td) / "missing.yaml"),
                "--log",
                str(Path(td) / "run.log"),
            )

            self.assertEqual(proc.returncode, 2, msg=proc.stderr)


if __name__ == "__main__":
    unittest.main()
