"""CLI tests driven through click's CliRunner."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FungiLens.cli import cli
from FungiLens.utils.log import log


_CONFIG_TEMPLATE = """
log:
  level: INFO
  to_file: false
  dir: log

documents:
  path: {documents}
  id_field: slug

search:
  min_score: 0
  hide_unmatched: true
  field_weights:
    default: 20
    commonName: 100
    substrate: 50

output:
  base_dir: {output}
  formats: [json]
"""


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config_path = self.tmp / "config.yml"
        self.config_path.write_text(
            _CONFIG_TEMPLATE.format(
                documents=json.dumps(str(REPO_ROOT / "data" / "fungi")),
                output=json.dumps(str(self.tmp / "output")),
            ),
            encoding="utf-8",
        )
        self.runner = CliRunner()

    def tearDown(self) -> None:
        # configure_logging bound handlers to CliRunner streams.
        for handler in log.handlers:
            handler.close()
        log.handlers.clear()
        self._tmp.cleanup()

    def _invoke(self, *args: str):
        return self.runner.invoke(cli, ["--config", str(self.config_path), *args])

    def _payload(self, action: str) -> list:
        (path,) = (self.tmp / "output" / "json").glob(f"{action}_*.json")
        return json.loads(path.read_text(encoding="utf-8"))

    def test_search(self) -> None:
        result = self._invoke("search", "hardwood")
        self.assertEqual(result.exit_code, 0, result.output)

        (entry,) = self._payload("search")
        self.assertEqual(entry["summary"]["query"], "hardwood")
        self.assertEqual(entry["summary"]["visibleCount"], 2)
        ids = [item["id"] for item in entry["results"]]
        self.assertEqual(set(ids), {"pleurotus-ostreatus", "ganoderma-lucidum"})
        self.assertIn("ecologyAndHabitat", entry["summary"]["matchedPerspectives"])

    def test_search_show_hidden(self) -> None:
        result = self._invoke("search", "hardwood", "--show-hidden")
        self.assertEqual(result.exit_code, 0, result.output)
        (entry,) = self._payload("search")
        self.assertEqual(len(entry["results"]), 3)
        self.assertEqual(entry["results"][-1]["visibility"], "hidden")

    def test_extract(self) -> None:
        result = self._invoke(
            "extract",
            "amanita-muscaria",
            "--field",
            "edibility",
            "--perspective",
            "safetyAndIdentification",
        )
        self.assertEqual(result.exit_code, 0, result.output)
        (entry,) = self._payload("extract")
        self.assertEqual(entry["values"], {"safetyAndIdentification": "poisonous"})
        self.assertEqual(entry["perspectives"], ["safetyAndIdentification"])

    def test_extract_deep(self) -> None:
        result = self._invoke("extract", "ganoderma-lucidum", "--mode", "deep")
        self.assertEqual(result.exit_code, 0, result.output)
        (entry,) = self._payload("extract")
        self.assertIn("medicinalAndHealth", entry["values"])
        self.assertNotIn("culinaryAndNutritional", entry["values"])

    def test_fields(self) -> None:
        result = self._invoke("fields", "pleurotus-ostreatus")
        self.assertEqual(result.exit_code, 0, result.output)
        (entry,) = self._payload("fields")
        paths = [field["path"] for field in entry["fields"]]
        self.assertNotIn("slug", paths)
        self.assertEqual(paths[0], "safetyAndIdentification.edibility")

    def test_unknown_document(self) -> None:
        result = self._invoke("fields", "no-such-fungus")
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Unknown document id", result.output)

    def test_missing_documents_path_aborts(self) -> None:
        self.config_path.write_text(
            _CONFIG_TEMPLATE.format(
                documents=json.dumps(str(self.tmp / "missing")),
                output=json.dumps(str(self.tmp / "output")),
            ),
            encoding="utf-8",
        )
        result = self._invoke("search", "agaric")
        self.assertNotEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
