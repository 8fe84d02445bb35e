# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for paths, PathTree, query filtering and snapshots."""

import pytest

from genro_firestub import (
    DataSnapshot,
    InvalidPathError,
    PathTree,
    QueryShape,
    apply_filter,
)
from genro_firestub.node import StoreNode
from genro_firestub.path import is_related, join_path, normalize_path, split_path
from genro_firestub.query import strict_deep_equal, strict_equal


class TestPath:
    """Tests for path normalization."""

    def test_split_strips_slashes(self):
        """Test leading, trailing and repeated slashes are ignored."""
        assert split_path('/a//b/') == ('a', 'b')
        assert split_path('a/b') == ('a', 'b')

    def test_normalize_same_path(self):
        """Test equivalent spellings normalize to the same string."""
        assert normalize_path('/resumes/123') == normalize_path('resumes/123')
        assert normalize_path('/resumes/123') == 'resumes/123'

    def test_empty_path_has_no_segments(self):
        """Test root-like paths yield no segments."""
        assert split_path('') == ()
        assert split_path('///') == ()

    def test_non_string_raises(self):
        """Test non-string paths are rejected."""
        with pytest.raises(InvalidPathError):
            split_path(42)
        with pytest.raises(InvalidPathError):
            split_path(None)

    def test_join_path(self):
        """Test joining fragments."""
        assert join_path('users/', '/u1', 'name') == 'users/u1/name'

    def test_is_related(self):
        """Test ancestor/descendant detection."""
        assert is_related(('a',), ('a', 'b'))
        assert is_related(('a', 'b'), ('a',))
        assert is_related(('a', 'b'), ('a', 'b'))
        assert not is_related(('a', 'b'), ('a', 'c'))
        assert is_related((), ('x',))


class TestStoreNode:
    """Tests for StoreNode."""

    def test_leaf(self):
        """Test a scalar node is a leaf."""
        node = StoreNode('name', 'Alice')
        assert node.is_leaf is True
        assert node.is_branch is False
        assert 'Alice' in repr(node)

    def test_branch(self):
        """Test a node holding a PathTree is a branch."""
        node = StoreNode('users', PathTree({'u1': 1}))
        assert node.is_branch is True
        assert 'PathTree(1)' in repr(node)


class TestPathTreeRead:
    """Tests for PathTree.read."""

    def test_read_nested(self):
        """Test reading at several depths."""
        tree = PathTree({'users': {'u1': {'name': 'Ann', 'age': 30}}})
        assert tree.read('users/u1/name') == 'Ann'
        assert tree.read('/users/u1') == {'name': 'Ann', 'age': 30}
        assert tree.read('users') == {'u1': {'name': 'Ann', 'age': 30}}

    def test_read_missing_is_none(self):
        """Test a missing path reads as None at any depth."""
        tree = PathTree({'users': {'u1': {'name': 'Ann'}}})
        assert tree.read('users/u2') is None
        assert tree.read('nothing/here/at/all') is None
        assert tree.read('users/u1/name/deeper') is None

    def test_read_root(self):
        """Test reading the root returns the whole tree or None."""
        assert PathTree().read('') is None
        assert PathTree({'a': 1}).read('/') == {'a': 1}

    def test_read_returns_copy(self):
        """Test mutating a read result leaves the tree untouched."""
        tree = PathTree({'users': {'u1': {'tags': ['a']}}})
        value = tree.read('users/u1')
        value['tags'].append('b')
        value['name'] = 'changed'
        assert tree.read('users/u1') == {'tags': ['a']}

    def test_insertion_order(self):
        """Test children keep their insertion order."""
        tree = PathTree()
        for key in ('c', 'a', 'b'):
            tree.write(f'items/{key}', key)
        assert list(tree.read('items')) == ['c', 'a', 'b']

    def test_contains(self):
        """Test membership by path."""
        tree = PathTree({'a': {'b': 1}})
        assert 'a/b' in tree
        assert 'a/c' not in tree


class TestPathTreeWrite:
    """Tests for PathTree.write, merge and delete."""

    def test_write_creates_intermediate(self):
        """Test writing creates missing branches."""
        tree = PathTree()
        tree.write('a/b/c', 1)
        assert tree.read('a') == {'b': {'c': 1}}

    def test_write_replaces_subtree(self):
        """Test write replaces instead of merging."""
        tree = PathTree({'r': {'id': 1, 'name': 'A'}})
        tree.write('r', {'name': 'B'})
        assert tree.read('r') == {'name': 'B'}

    def test_write_deep_copies(self):
        """Test later caller-side mutation does not reach the tree."""
        tree = PathTree()
        record = {'name': 'A', 'tags': ['x']}
        tree.write('r', record)
        record['name'] = 'B'
        record['tags'].append('y')
        assert tree.read('r') == {'name': 'A', 'tags': ['x']}

    def test_write_through_leaf(self):
        """Test writing below a leaf turns it into a branch."""
        tree = PathTree({'a': 1})
        tree.write('a/b', 2)
        assert tree.read('a') == {'b': 2}

    def test_write_none_deletes(self):
        """Test writing None removes the node."""
        tree = PathTree({'a': {'b': 1, 'c': 2}})
        tree.write('a/b', None)
        assert tree.read('a') == {'c': 2}

    def test_write_drops_nested_none(self):
        """Test None values inside a record are not stored."""
        tree = PathTree()
        tree.write('r', {'a': 1, 'b': None, 'c': {}})
        assert tree.read('r') == {'a': 1}

    def test_merge_keeps_other_fields(self):
        """Test merge only touches the given fields."""
        tree = PathTree({'p': {'id': 1, 'name': 'A'}})
        tree.merge('p', {'name': 'B'})
        assert tree.read('p') == {'id': 1, 'name': 'B'}

    def test_merge_into_missing(self):
        """Test merge on an absent path starts from an empty record."""
        tree = PathTree()
        tree.merge('p', {'name': 'B'})
        assert tree.read('p') == {'name': 'B'}

    def test_merge_none_removes_field(self):
        """Test a None field in a merge deletes that field."""
        tree = PathTree({'p': {'id': 1, 'name': 'A'}})
        tree.merge('p', {'name': None})
        assert tree.read('p') == {'id': 1}

    def test_merge_scalar_replaces(self):
        """Test merging a non-mapping behaves like write."""
        tree = PathTree({'p': {'id': 1}})
        tree.merge('p', 'test value 123')
        assert tree.read('p') == 'test value 123'

    def test_delete(self):
        """Test delete clears the path and its descendants."""
        tree = PathTree({'a': {'b': {'c': 1}, 'd': 2}})
        assert tree.delete('a/b') is True
        assert tree.read('a/b') is None
        assert tree.read('a/b/c') is None
        assert tree.read('a') == {'d': 2}

    def test_delete_missing(self):
        """Test deleting an absent path is a no-op."""
        tree = PathTree({'a': 1})
        assert tree.delete('x/y') is False
        assert tree.read('') == {'a': 1}

    def test_delete_prunes_empty_branches(self):
        """Test branches left empty disappear."""
        tree = PathTree({'a': {'b': {'c': 1}}, 'z': 1})
        tree.delete('a/b/c')
        assert tree.read('a') is None
        assert tree.keys() == ['z']

    def test_load_replaces_everything(self):
        """Test load discards previous content."""
        tree = PathTree({'a': 1})
        tree.load({'b': 2})
        assert tree.as_dict() == {'b': 2}

    def test_load_invalid_type_raises(self):
        """Test load only accepts mappings."""
        with pytest.raises(TypeError, match="must be a mapping"):
            PathTree().load([('a', 1)])

    @pytest.mark.parametrize('source', [{'a/b': 1}, {'': 1}, {'ok': {'x/y': 1}}])
    def test_unaddressable_keys_raise(self, source):
        """Test keys empty or holding the separator are refused."""
        tree = PathTree({'keep': 1})
        with pytest.raises(InvalidPathError):
            tree.write('x', source)
        with pytest.raises(InvalidPathError):
            tree.merge('keep2', source)
        with pytest.raises(InvalidPathError):
            tree.load(source)
        assert tree.as_dict() == {'keep': 1}

    def test_load_keeps_parents(self):
        """Test loaded branches hang from the receiving tree."""
        tree = PathTree()
        tree.load({'a': {'b': {'c': 1}}})
        tree.delete('a/b/c')
        assert tree.read('') is None


class TestQueryFilter:
    """Tests for apply_filter and strict_equal."""

    RESUMES = {
        'r1': {'id': 'r1', 'user': 'u1'},
        'r2': {'id': 'r2', 'user': 'u2'},
        'r3': {'id': 'r3', 'user': 'u1'},
    }

    def test_no_shape_is_identity(self):
        """Test a missing shape returns the value unchanged."""
        assert apply_filter(self.RESUMES, None) is self.RESUMES

    def test_filters_and_keeps_order(self):
        """Test matching entries survive in their original order."""
        result = apply_filter(self.RESUMES, QueryShape('user', 'u1'))
        assert list(result) == ['r1', 'r3']
        assert result['r3'] == {'id': 'r3', 'user': 'u1'}

    def test_no_match_is_empty_mapping(self):
        """Test filtering out everything yields an empty dict."""
        assert apply_filter(self.RESUMES, QueryShape('user', 'nobody')) == {}

    def test_scalar_passes_through(self):
        """Test non-mapping values are not filtered."""
        shape = QueryShape('user', 'u1')
        assert apply_filter(True, shape) is True
        assert apply_filter(None, shape) is None
        assert apply_filter([1, 2], shape) == [1, 2]

    def test_skips_non_record_children(self):
        """Test children that are not records never match."""
        value = {'a': 'u1', 'b': {'user': 'u1'}, 'c': {'other': 'u1'}}
        assert apply_filter(value, QueryShape('user', 'u1')) == {'b': {'user': 'u1'}}

    def test_strict_equality(self):
        """Test no coercion between types."""
        value = {'a': {'n': 1}, 'b': {'n': True}, 'c': {'n': '1'}, 'd': {'n': 1.0}}
        assert list(apply_filter(value, QueryShape('n', 1))) == ['a', 'd']
        assert list(apply_filter(value, QueryShape('n', True))) == ['b']
        assert list(apply_filter(value, QueryShape('n', '1'))) == ['c']

    def test_strict_equal(self):
        """Test strict_equal directly."""
        assert strict_equal('x', 'x')
        assert not strict_equal(0, False)
        assert not strict_equal(None, 0)

    def test_strict_deep_equal(self):
        """Test nested comparison keeps the no-coercion rule."""
        assert strict_deep_equal({'a': [1, {'b': 'x'}]}, {'a': [1.0, {'b': 'x'}]})
        assert not strict_deep_equal({'flag': 1}, {'flag': True})
        assert not strict_deep_equal({'a': 1}, {'a': 1, 'b': 2})
        assert not strict_deep_equal([0], [False])
        assert not strict_deep_equal({'a': 1}, [1])
        assert not strict_deep_equal([1, 2], [1])


class TestDataSnapshot:
    """Tests for DataSnapshot."""

    def test_val_is_copy(self):
        """Test val returns an independent copy."""
        snapshot = DataSnapshot('u1', {'name': 'Ann'})
        value = snapshot.val()
        value['name'] = 'Bob'
        assert snapshot.val() == {'name': 'Ann'}

    def test_exists(self):
        """Test exists reflects presence."""
        assert DataSnapshot('a', 0).exists() is True
        assert DataSnapshot('a', None).exists() is False

    def test_children(self):
        """Test child navigation and counting."""
        snapshot = DataSnapshot('users', {'u1': {'name': 'Ann'}, 'u2': {}})
        assert snapshot.has_children() is True
        assert snapshot.num_children() == 2
        child = snapshot.child('u1/name')
        assert child.key == 'name'
        assert child.val() == 'Ann'
        assert snapshot.child('u9/name').val() is None
        assert DataSnapshot('x', 3).num_children() == 0
