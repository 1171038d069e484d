"""Tests for the command line front end."""

import json

import pytest

from cli import main, parse_args


@pytest.fixture
def tree(tmp_path):
    conf = tmp_path.resolve()
    (conf / "parts").mkdir()
    (conf / "app.cfg").write_text(
        "#include parts/*.cfg\n"
        "#include missing.cfg\n"
        "[DEFAULT]\n"
        "root = /srv\n"
        "[app]\n"
        "home = %(root)s/app\n"
    )
    (conf / "parts" / "db.cfg").write_text("[db]\nport = 5432\n")
    return conf


class TestParseArgs:
    """Tests for argument parsing."""
    
    def test_defaults(self):
        parsed = parse_args(["app.cfg"])
        
        assert parsed.files == ["app.cfg"]
        assert parsed.format == "ini"
        assert parsed.separators == "=:"
        assert parsed.encoding == "utf-8"
        assert parsed.verbose == 0
    
    def test_get(self):
        parsed = parse_args(["app.cfg", "--get", "db", "port", "-vv"])
        
        assert parsed.get == ["db", "port"]
        assert parsed.verbose == 2


class TestMain:
    """Tests for the main entry point."""
    
    def test_ini_output(self, tree, capsys):
        assert main([str(tree / "app.cfg")]) == 0
        
        out = capsys.readouterr().out
        assert "[app]\nhome = %(root)s/app" in out
        assert "[db]\nport = 5432" in out
    
    def test_json_output_expanded(self, tree, capsys):
        assert main([str(tree / "app.cfg"), "-f", "json"]) == 0
        
        data = json.loads(capsys.readouterr().out)
        assert data["app"]["home"] == "/srv/app"
        assert data["db"]["port"] == "5432"
    
    def test_get_value(self, tree, capsys):
        assert main([str(tree / "app.cfg"), "--get", "app", "home"]) == 0
        assert capsys.readouterr().out == "/srv/app\n"
        
        assert main([str(tree / "app.cfg"), "--get", "app", "home", "--raw"]) == 0
        assert capsys.readouterr().out == "%(root)s/app\n"
    
    def test_tree_output(self, tree, capsys):
        assert main([str(tree / "app.cfg"), "-f", "tree", "--ascii-style", "ascii"]) == 0
        
        out = capsys.readouterr().out
        assert out == "app.cfg\n|-- parts/db.cfg\n\\-- missing.cfg [SKIPPED]\n"
    
    def test_output_file(self, tree, tmp_path, capsys):
        target = tmp_path / "out.yaml"
        
        assert main([str(tree / "app.cfg"), "-f", "yaml", "-o", str(target)]) == 0
        
        assert "port: '5432'" in target.read_text()
        assert "Output written to" in capsys.readouterr().err
    
    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.cfg")]) == 1
        assert "Error: required file cannot be opened" in capsys.readouterr().err
    
    def test_syntax_error(self, tmp_path, capsys):
        bad = tmp_path / "bad.cfg"
        bad.write_text("[s]\njustsomewords\n")
        
        assert main([str(bad)]) == 1
        assert "could not parse line: justsomewords" in capsys.readouterr().err
    
    def test_unknown_option(self, tree, capsys):
        assert main([str(tree / "app.cfg"), "--get", "app", "nope"]) == 1
        assert "option not found: app.nope" in capsys.readouterr().err
    
    def test_empty_separators(self, tree, capsys):
        assert main([str(tree / "app.cfg"), "--separators", ""]) == 1
        assert "separators must not be empty" in capsys.readouterr().err
