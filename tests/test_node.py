"""Tests for the entity graph model."""

import pytest

from tana_outline.core.exceptions import MalformedExportError
from tana_outline.core.node import DocType, Node, Props

from conftest import SUPERTAG_MARKER, make_doc, tagged_docs


class TestDocType:
    """Tests for mapping raw `_docType` strings."""

    def test_known_kinds(self):
        assert DocType.from_raw('tuple') is DocType.TUPLE
        assert DocType.from_raw('codeblock') is DocType.CODEBLOCK
        assert DocType.from_raw('search') is DocType.SEARCH

    def test_unknown_and_missing_are_text(self):
        assert DocType.from_raw(None) is DocType.TEXT
        assert DocType.from_raw('') is DocType.TEXT
        assert DocType.from_raw('metanode') is DocType.TEXT
        assert DocType.from_raw('Tuple') is DocType.TEXT

    def test_stub_node_is_text(self):
        assert Node(id='stub').doc_type is DocType.TEXT

    def test_node_doc_type_from_props(self):
        node = Node(id='t', props=Props(doc_type='tuple'))
        assert node.doc_type is DocType.TUPLE


class TestStubAccessors:
    """Nodes without props answer None instead of failing."""

    def test_stub_accessors(self):
        node = Node(id='stub')
        assert node.name is None
        assert node.description is None
        assert node.owner is None
        assert node.meta_node is None
        assert node.tag_list() == []


class TestTagList:
    """Tests for reading supertags from the meta node."""

    def test_tags_from_declaration(self, build_graph):
        nodes, _ = build_graph([SUPERTAG_MARKER] + tagged_docs('n1', 'Tagged', ['project', 'work']))
        assert nodes.get('n1').tag_list() == ['project', 'work']

    def test_no_meta_node(self, build_graph):
        nodes, _ = build_graph([make_doc('n1', 'Plain')])
        assert nodes.get('n1').tag_list() == []

    def test_meta_without_declaration(self, build_graph):
        docs = [
            SUPERTAG_MARKER,
            make_doc('n1', 'Node', meta='n1_meta'),
            make_doc('n1_meta', doc_type='metanode', children=['other_tuple']),
            make_doc('other_tuple', doc_type='tuple', children=['SYS_A12', 'locked_value']),
            make_doc('SYS_A12', 'Locked'),
            make_doc('locked_value', 'yes'),
        ]
        nodes, _ = build_graph(docs)
        assert nodes.get('n1').tag_list() == []

    def test_empty_tuple_is_not_declaration(self, build_graph):
        docs = [
            make_doc('n1', 'Node', meta='n1_meta'),
            make_doc('n1_meta', doc_type='metanode', children=['empty_tuple']),
            make_doc('empty_tuple', doc_type='tuple'),
        ]
        nodes, _ = build_graph(docs)
        assert nodes.get('n1').tag_list() == []

    def test_unnamed_supertag_is_fatal(self):
        marker = Node(id='SYS_A13', props=Props(name='Tag'))
        unnamed = Node(id='tag_x', props=Props())
        declaration = Node(id='decl', props=Props(doc_type='tuple'), children=[marker, unnamed])
        meta = Node(id='meta', props=Props(doc_type='metanode'), children=[declaration])
        node = Node(id='n1', props=Props(name='Node', meta=meta))

        with pytest.raises(MalformedExportError) as exc_info:
            node.tag_list()
        assert 'tag_x' in str(exc_info.value)


class TestIsInTrash:
    """Tests for trash detection through the owner chain."""

    def test_own_id(self):
        assert Node(id='ws_TRASH').is_in_trash() is True

    def test_direct_owner(self):
        trash = Node(id='ws_TRASH', props=Props())
        node = Node(id='n1', props=Props(owner=trash))
        assert node.is_in_trash() is True

    def test_transitive_owner(self):
        trash = Node(id='ws_TRASH', props=Props())
        parent = Node(id='parent', props=Props(owner=trash))
        node = Node(id='n1', props=Props(owner=parent))
        assert node.is_in_trash() is True

    def test_not_in_trash(self):
        parent = Node(id='parent', props=Props())
        node = Node(id='n1', props=Props(owner=parent))
        assert node.is_in_trash() is False

    def test_trash_in_middle_of_id_does_not_count(self):
        assert Node(id='ws_TRASH_extra').is_in_trash() is False

    def test_owner_cycle_terminates(self):
        a = Node(id='a', props=Props())
        b = Node(id='b', props=Props(owner=a))
        a.props.owner = b
        assert a.is_in_trash() is False
        assert b.is_in_trash() is False

    def test_owner_cycle_reaching_trash(self, build_graph):
        docs = [
            make_doc('a', 'A', owner='b'),
            make_doc('b', 'B', owner='x_TRASH'),
            make_doc('x_TRASH', 'Trash', owner='a'),
        ]
        nodes, _ = build_graph(docs)
        assert nodes.get('a').is_in_trash() is True


class TestIsSystemNode:
    """Tests for system node detection."""

    def test_system_prefix(self):
        assert Node(id='SYS_FOO').is_system_node() is True
        assert Node(id='SYS_A13').is_system_node() is True

    def test_regular_node(self):
        assert Node(id='abc').is_system_node() is False
        assert Node(id='my_SYS').is_system_node() is False
