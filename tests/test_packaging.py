"""Checks on the project metadata in pyproject.toml."""

import os
import unittest

PYPROJECT = os.path.join(os.path.dirname(__file__), "..", "pyproject.toml")


def _project_table_lines():
    lines = []
    in_project = False
    with open(PYPROJECT, encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if line.startswith("["):
                in_project = line == "[project]"
                continue
            if in_project and line:
                lines.append(line)
    return lines


class TestProjectMetadata(unittest.TestCase):

    def test_long_description_is_not_requirements_document(self):
        for line in _project_table_lines():
            if line.startswith("readme"):
                self.assertNotIn("SPEC_FULL", line)

    def test_numpy_is_a_runtime_dependency(self):
        text = "\n".join(_project_table_lines())
        self.assertIn('"numpy', text)


if __name__ == "__main__":
    unittest.main()
