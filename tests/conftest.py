# conftest.py - shared fixtures

import pytest

from bracket_index.core.trie import PrefixTrie


@pytest.fixture
def words():
    # (text, offset, line_length)
    return [
        ("cat", 0, 8),
        ("car", 9, 7),
        ("cart", 17, 12),
        ("dog", 30, 5),
        ("do", 36, 4),
    ]


@pytest.fixture
def trie(words):
    t = PrefixTrie()
    for text, off, ln in words:
        t.insert(text, off, ln)
    return t


@pytest.fixture
def sample_file(tmp_path):
    p = tmp_path / "dict.txt"
    p.write_text("a[cat]bc\nx[car]y\n", encoding="utf-8")
    return p
