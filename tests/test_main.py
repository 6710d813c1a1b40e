"""Tests for the tabularbuilder CLI."""
import pytest

from tabularbuilder.__main__ import main


ROWS = """
- {name: John, age: 20, role: admin}
- {name: Jane, age: 21, role: user}
- {name: Jim, age: 22, role: admin}
"""

COLUMNS = """
columns:
  - name: name
  - name: age
  - name: role
    when: role == 'admin'
"""


@pytest.fixture
def files(tmp_path):
    rows = tmp_path / "rows.yml"
    rows.write_text(ROWS)
    cols = tmp_path / "columns.yml"
    cols.write_text(COLUMNS)
    return str(rows), str(cols)


class TestMain:
    """Tests for main()."""

    def test_table(self, files, capsys):
        rows, cols = files
        assert main([rows, "--columns", cols]) == 0
        out = capsys.readouterr().out
        assert out.splitlines() == [
            "name\tage\trole",
            "John\t20\tadmin",
            "Jane\t21\tuser",
            "Jim\t22\tadmin",
        ]

    def test_group_by(self, files, capsys):
        rows, cols = files
        assert main([rows, "-c", cols, "--group-by", "role"]) == 0
        out = capsys.readouterr().out
        admin, user = out.split("\n\n")
        assert admin.splitlines()[:2] == ["# role = admin", "name\tage\trole"]
        assert user.splitlines()[:2] == ["# role = user", "name\tage"]

    def test_bad_spec(self, tmp_path, files, capsys):
        rows, _ = files
        bad = tmp_path / "bad.yml"
        bad.write_text("columns:\n  - field: age\n")
        assert main([rows, "-c", str(bad)]) == 1
        assert "'name' is required" in capsys.readouterr().err

    def test_missing_rows_file(self, tmp_path, files, capsys):
        _, cols = files
        assert main([str(tmp_path / "nope.yml"), "-c", cols]) == 1
        assert "tabularbuilder error" in capsys.readouterr().err

    def test_columns_required(self, files):
        rows, _ = files
        with pytest.raises(SystemExit):
            main([rows])

    @pytest.mark.parametrize(
        "spec, extra, message",
        [
            ("columns:\n  - name: name\n  - name: role\n", [], "row has no field 'role'"),
            ("columns:\n  - name: name\n    when: role == 'admin'\n", [], "'role' is not defined"),
            ("columns:\n  - name: name\n", ["-g", "role"], "row has no field 'role'"),
        ],
    )
    def test_row_missing_field(self, tmp_path, capsys, spec, extra, message):
        rows = tmp_path / "rows.yml"
        rows.write_text("- {name: John, age: 20}\n")
        cols = tmp_path / "columns.yml"
        cols.write_text(spec)
        assert main([str(rows), "-c", str(cols), *extra]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("tabularbuilder error:")
        assert message in captured.err
