from __future__ import annotations

from treemount.config import Settings
from treemount.services.memory_tree import MemoryTree
from treemount.services.path_util import TreePath
from treemount.services.resources import ContentMeta
from treemount.services.sub_path_tree import SubPathTree
from treemount.services.tree_stack import TreeBuilder, build_tree


def _stack():
    keys = MemoryTree()
    project = MemoryTree()
    base = MemoryTree()
    stack = (
        TreeBuilder.builder()
        .base(base)
        .sub_tree('keys', keys)
        .sub_tree('keys/project', project)
        .build()
    )
    return stack, keys, project, base


def test_select_prefers_deepest_mount():
    stack, keys, project, base = _stack()

    selected = stack.select('keys/project/a')
    assert isinstance(selected, SubPathTree)
    assert selected.get_sub_path() == TreePath('keys/project')
    assert stack.select('keys/projects').get_sub_path() == TreePath('keys')
    assert stack.select('other/a') is base


def test_writes_land_in_the_selected_delegate():
    stack, keys, project, base = _stack()

    stack.create_resource('keys/project/a', ContentMeta(b'p'))
    stack.create_resource('keys/a', ContentMeta(b'k'))
    stack.create_resource('other/a', ContentMeta(b'b'))

    assert project.get_resource('a').contents.data == b'p'
    assert keys.get_resource('a').contents.data == b'k'
    assert base.get_resource('other/a').contents.data == b'b'
    assert stack.get_resource('keys/project/a').path == TreePath('keys/project/a')

    stack.update_resource('keys/a', ContentMeta(b'k2'))
    assert keys.get_resource('a').contents.data == b'k2'
    assert stack.delete_resource('keys/project/a') is True
    assert not project.has_resource('a')


def test_listing_includes_mount_points():
    stack, keys, project, base = _stack()
    base.create_resource('other/a', ContentMeta(b'b'))
    keys.create_resource('a', ContentMeta(b'k'))

    assert {r.path.path for r in stack.list_directory('')} == {'keys', 'other'}
    assert {r.path.path for r in stack.list_directory_subdirs('')} == {'keys', 'other'}
    assert stack.list_directory_resources('') == set()
    assert {r.path.path for r in stack.list_directory('keys')} == {'keys/a', 'keys/project'}
    assert {r.path.path for r in stack.list_directory_resources('keys')} == {'keys/a'}
    assert stack.list_directory('keys/project') == set()


def test_parents_of_mount_points_are_directories():
    stack = TreeBuilder.builder().sub_tree('a/b/c', MemoryTree()).build()

    assert stack.has_directory('a')
    assert stack.has_path('a/b')
    assert stack.has_directory('a/b/c')
    assert not stack.has_resource('a/b/c')
    assert stack.get_path('a/b').is_directory
    assert {r.path.path for r in stack.list_directory('a')} == {'a/b'}
    assert not stack.has_path('z')


def test_build_tree_mounts_file_storage(tmp_path):
    stack = build_tree(Settings(storage_root=str(tmp_path), mount_path='keys'))

    stack.create_resource('keys/a/b', ContentMeta(b'secret'))

    assert (tmp_path / 'content' / 'a' / 'b').read_bytes() == b'secret'
    assert stack.get_resource('keys/a/b').path == TreePath('keys/a/b')
    assert {r.path.path for r in stack.list_directory('')} == {'keys'}


def test_build_tree_can_keep_full_paths(tmp_path):
    stack = build_tree(Settings(storage_root=str(tmp_path), mount_path='keys', remove_path_prefix=False))

    stack.create_resource('keys/a', ContentMeta(b'secret'))

    assert (tmp_path / 'content' / 'keys' / 'a').read_bytes() == b'secret'
    assert stack.get_resource('keys/a').path == TreePath('keys/a')
