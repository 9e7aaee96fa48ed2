from __future__ import annotations

from treemount.services import path_util
from treemount.services.path_util import TreePath


def test_tree_path_is_cleaned_and_compared_by_segments():
    assert TreePath('/x//y/') == TreePath('x/y')
    assert TreePath('x/y').components == ('x', 'y')
    assert TreePath('x/y').name == 'y'
    assert TreePath('') == path_util.ROOT
    assert hash(TreePath('a/b/')) == hash(TreePath('a/b'))


def test_is_root_accepts_empty_and_separator_only():
    assert path_util.is_root('')
    assert path_util.is_root('/')
    assert path_util.is_root(None)
    assert path_util.is_root(TreePath('//'))
    assert not path_util.is_root('a')


def test_has_root_matches_whole_segments_only():
    assert path_util.has_root('x/y/a', 'x/y')
    assert path_util.has_root('x/y', 'x/y')
    assert path_util.has_root('anything', '')
    assert not path_util.has_root('x/yz', 'x/y')
    assert not path_util.has_root('x', 'x/y')


def test_remove_prefix_strips_root_and_leaves_other_paths_alone():
    assert path_util.remove_prefix('x/y', 'x/y/a/b') == 'a/b'
    assert path_util.remove_prefix('x/y', 'x/y') == ''
    assert path_util.remove_prefix('/x/y/', '/x/y/a') == 'a'
    assert path_util.remove_prefix('x/y', 'z/a') == 'z/a'
    assert path_util.remove_prefix('', 'a/b') == 'a/b'


def test_append_path_joins_with_single_separator():
    assert path_util.append_path('x/y', 'a/b') == 'x/y/a/b'
    assert path_util.append_path('x/y/', '/a') == 'x/y/a'
    assert path_util.append_path('x/y', '') == 'x/y'
    assert path_util.append_path('', 'a') == 'a'


def test_parent_and_child_under():
    assert path_util.parent_path('a/b/c') == TreePath('a/b')
    assert path_util.parent_path('a') == path_util.ROOT
    assert path_util.child_under('a', 'a/b/c') == TreePath('a/b')
    assert path_util.child_under('', 'a/b') == TreePath('a')
    assert path_util.child_under('a', 'a') is None
    assert path_util.child_under('a', 'b/c') is None
