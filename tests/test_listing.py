from __future__ import annotations

from datetime import timezone
from pathlib import Path

import pytest

from fileshelf.services.errors import NotFound
from fileshelf.services.listing import DirectoryLister, describe
from fileshelf.services.paths import PathResolver


@pytest.fixture
def resolver(tmp_path):
    return PathResolver(tmp_path)


def test_missing_directory_lists_empty(resolver):
    lister = DirectoryLister(resolver)

    assert lister.list(resolver.resolve('not/here')) == []


def test_file_path_is_not_found(resolver, tmp_path):
    (tmp_path / 'a.txt').write_text('x')

    with pytest.raises(NotFound):
        DirectoryLister(resolver).list(resolver.resolve('a.txt'))


def test_lists_immediate_children_sorted_case_insensitively(resolver, tmp_path):
    (tmp_path / 'b.txt').write_text('bb')
    (tmp_path / 'a').mkdir()
    (tmp_path / 'a' / 'nested.txt').write_text('hidden from listing')
    (tmp_path / 'C.md').write_text('c')

    names = [e.name for e in DirectoryLister(resolver).list(resolver.root)]

    assert names == ['a', 'b.txt', 'C.md']


def test_directory_entries_have_zero_size_and_no_type(resolver, tmp_path):
    (tmp_path / 'photos.d').mkdir()
    (tmp_path / 'photos.d' / 'x.jpg').write_bytes(b'1234')

    [entry] = DirectoryLister(resolver).list(resolver.root)

    assert entry.is_directory is True
    assert entry.size == 0
    assert entry.type == ''
    assert entry.path == 'photos.d'


def test_file_entry_metadata(resolver, tmp_path):
    (tmp_path / 'docs').mkdir()
    (tmp_path / 'docs' / 'archive.tar.gz').write_bytes(b'12345678')
    (tmp_path / 'docs' / 'README').write_text('r')

    entries = DirectoryLister(resolver).list(resolver.resolve('docs'))

    assert [(e.name, e.path, e.size, e.type) for e in entries] == [
        ('archive.tar.gz', 'docs/archive.tar.gz', 8, 'gz'),
        ('README', 'docs/README', 1, ''),
    ]
    assert entries[0].modified.tzinfo == timezone.utc


def test_relative_path_of_root_is_empty(resolver):
    assert resolver.relative(resolver.root) == ''


def test_describe_takes_directory_flag_from_a_single_stat(resolver, tmp_path, monkeypatch):
    (tmp_path / 'docs').mkdir()

    def _second_stat(_self):
        raise AssertionError('describe should not stat twice')

    monkeypatch.setattr(Path, 'is_dir', _second_stat)
    entry = describe(resolver, tmp_path / 'docs')

    assert entry.is_directory is True
    assert entry.size == 0
    assert entry.type == ''
