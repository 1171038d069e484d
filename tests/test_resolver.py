"""Tests for the file resolver and glob discovery."""

import os

import pytest

from loader.config import LoaderConfig
from loader.discovery import expand_pattern, has_glob, to_pattern
from loader.resolver import FileResolver


@pytest.fixture
def conf_dir(tmp_path):
    """A root file in conf/ with a few sibling files on disk."""
    conf = tmp_path / "conf"
    (conf / "sub").mkdir(parents=True)
    (conf / "root.cfg").write_text("")
    (conf / "sub" / "x.cfg").write_text("")
    (conf / "sub" / "y.cfg").write_text("")
    (conf / "sub" / "notes.txt").write_text("")
    return conf.resolve()


class TestDiscovery:
    """Tests for glob helpers."""
    
    def test_has_glob(self):
        assert has_glob("conf.d/*.cfg")
        assert has_glob("app?.cfg")
        assert not has_glob("app[12].cfg")
        assert not has_glob("/etc/env[prod]/app.cfg")
        assert not has_glob("conf.d/app.cfg")
    
    def test_expand_pattern_sorted_files_only(self, conf_dir):
        (conf_dir / "sub" / "dir.cfg").mkdir()
        
        matches = expand_pattern(conf_dir / "sub" / "*.cfg")
        
        assert [m.name for m in matches] == ["x.cfg", "y.cfg"]
    
    def test_expand_pattern_no_match(self, conf_dir):
        assert expand_pattern(conf_dir / "nothing" / "*.cfg") == []
    
    def test_to_pattern_escapes_base_and_brackets(self):
        assert to_pattern("/etc/env[prod]", "conf.d/*.cfg") == "/etc/env[[]prod]/conf.d/*.cfg"
        assert to_pattern("/etc", "app[1]?.cfg") == "/etc/app[[]1]?.cfg"
        assert to_pattern("/ignored", "/abs/*.cfg") == "/abs/*.cfg"


class TestEnqueue:
    """Tests for queueing files."""
    
    def test_first_relative_path_uses_cwd(self, conf_dir, monkeypatch):
        monkeypatch.chdir(conf_dir)
        resolver = FileResolver()
        
        resolver.enqueue("root.cfg", required=True)
        
        assert resolver.root.path == conf_dir / "root.cfg"
        assert resolver.root.required
        assert not resolver.root.read
    
    def test_relative_to_root_directory(self, conf_dir, tmp_path, monkeypatch):
        """Test that later relative paths ignore the working directory."""
        monkeypatch.chdir(tmp_path)
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        
        added = resolver.include("sub/x.cfg", source=conf_dir / "sub" / "y.cfg")
        
        assert [e.path for e in added] == [conf_dir / "sub" / "x.cfg"]
    
    def test_dedup_by_canonical_path(self, conf_dir):
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        
        assert resolver.include("root.cfg") == []
        assert resolver.include("sub/../root.cfg") == []
        assert resolver.include(str(conf_dir / "sub" / ".." / "root.cfg")) == []
        assert len(resolver) == 1
    
    def test_dedup_keeps_first_required_flag(self, conf_dir):
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        resolver.include("sub/x.cfg")
        resolver.require("sub/x.cfg")
        
        assert resolver.entries[1].required is False
    
    def test_dedup_through_symlink(self, conf_dir):
        link = conf_dir / "link.cfg"
        try:
            os.symlink(conf_dir / "sub" / "x.cfg", link)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        resolver.include("sub/x.cfg")
        
        assert resolver.include("link.cfg") == []
    
    def test_missing_file_is_queued(self, conf_dir):
        """Test that existence is not checked at enqueue time."""
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        
        added = resolver.require("missing.cfg")
        
        assert len(added) == 1
        assert added[0].path == conf_dir / "missing.cfg"
        assert conf_dir / "missing.cfg" in resolver
    
    def test_glob_expansion(self, conf_dir):
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        
        added = resolver.include("sub/*.cfg")
        
        assert [e.path.name for e in added] == ["x.cfg", "y.cfg"]
        assert resolver.include("sub/?.cfg") == []
    
    def test_glob_no_match_is_empty(self, conf_dir):
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        
        assert resolver.require("none/*.cfg") == []
        assert len(resolver) == 1
    
    def test_glob_no_match_literal(self, conf_dir):
        resolver = FileResolver(LoaderConfig(unmatched_glob_literal=True))
        resolver.require(conf_dir / "root.cfg")
        
        added = resolver.require("none/*.cfg")
        
        assert len(added) == 1
        assert added[0].path.name == "*.cfg"
        assert added[0].required
    
    def test_records_include_graph(self, conf_dir):
        resolver = FileResolver()
        root = conf_dir / "root.cfg"
        resolver.require(root)
        resolver.include("sub/x.cfg", source=root)
        resolver.require("root.cfg", source=conf_dir / "sub" / "x.cfg")
        
        graph = resolver.graph
        assert graph.root == root
        assert graph.get_targets(root) == [conf_dir / "sub" / "x.cfg"]
        assert graph.is_required(conf_dir / "sub" / "x.cfg", root)
    
    def test_bracketed_root_directory(self, tmp_path):
        """Test that brackets in the root's directory are not wildcards."""
        env = tmp_path.resolve() / "env[prod]"
        (env / "sub").mkdir(parents=True)
        (env / "app.cfg").write_text("")
        (env / "sub" / "x.cfg").write_text("")
        resolver = FileResolver()
        
        resolver.require(env / "app.cfg")
        literal = resolver.require("missing.cfg")
        globbed = resolver.include("sub/*.cfg")
        
        assert resolver.root.path == env / "app.cfg"
        assert [e.path for e in literal] == [env / "missing.cfg"]
        assert [e.path for e in globbed] == [env / "sub" / "x.cfg"]
    
    def test_brackets_in_file_name_are_literal(self, conf_dir):
        (conf_dir / "sub" / "x[1].cfg").write_text("")
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        
        assert [e.path.name for e in resolver.include("sub/x[1].cfg")] == ["x[1].cfg"]
        assert [e.path.name for e in resolver.include("sub/x[1]*")] == []
        assert [e.path.name for e in resolver.include("sub/x*")] == ["x.cfg"]


class TestDrain:
    """Tests for the fixed-point read loop."""
    
    def test_drain_pass_marks_read(self, conf_dir):
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        seen = []
        
        assert resolver.drain_pass(lambda entry: seen.append(entry.path)) is True
        assert resolver.root.read
        assert resolver.drain_pass(lambda entry: seen.append(entry.path)) is False
        assert seen == [conf_dir / "root.cfg"]
    
    def test_entries_added_mid_pass_read_next_pass(self, conf_dir):
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        seen = []
        
        def read_one(entry):
            seen.append(entry.path.name)
            if entry.path.name == "root.cfg":
                resolver.include("sub/x.cfg")
            elif entry.path.name == "x.cfg":
                resolver.include("sub/y.cfg")
                resolver.include("root.cfg")
        
        passes = resolver.drain(read_one)
        
        assert seen == ["root.cfg", "x.cfg", "y.cfg"]
        assert passes == 3
        assert all(entry.read for entry in resolver)
    
    def test_failed_read_stays_unread(self, conf_dir):
        resolver = FileResolver()
        resolver.require(conf_dir / "root.cfg")
        
        def fail(entry):
            raise RuntimeError("boom")
        
        with pytest.raises(RuntimeError):
            resolver.drain_pass(fail)
        
        assert resolver.root.read is False
