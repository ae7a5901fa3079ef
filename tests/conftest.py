"""Shared fixtures for converter tests."""

from pathlib import Path

import pytest

from tana_outline.core.block_builder import BlockBuilder
from tana_outline.core.node_builder import NodeBuilder


FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_EXPORT = FIXTURES_DIR / "sample_tana_export.json"


def make_doc(doc_id, name=None, children=None, doc_type=None, owner=None, meta=None,
             description=None, source=None, created=1):
    """Build a raw export record."""
    props = {'created': created}
    if name is not None:
        props['name'] = name
    if description is not None:
        props['description'] = description
    if doc_type is not None:
        props['_docType'] = doc_type
    if owner is not None:
        props['_ownerId'] = owner
    if meta is not None:
        props['_metaNodeId'] = meta
    if source is not None:
        props['_sourceId'] = source

    doc = {'id': doc_id, 'props': props}
    if children is not None:
        doc['children'] = children
    return doc


def tagged_docs(doc_id, name, tag_names, **kwargs):
    """Records for a node tagged with `tag_names` through a meta node."""
    meta_id = f'{doc_id}_meta'
    tuple_id = f'{doc_id}_meta_tags'
    tag_ids = [f'tag_{tag}' for tag in tag_names]
    docs = [
        make_doc(doc_id, name, meta=meta_id, **kwargs),
        make_doc(meta_id, doc_type='metanode', owner=doc_id, children=[tuple_id]),
        make_doc(tuple_id, doc_type='tuple', owner=meta_id, children=['SYS_A13'] + tag_ids),
    ]
    docs += [make_doc(tag_id, tag, doc_type='tagDef') for tag_id, tag in zip(tag_ids, tag_names)]
    return docs


SUPERTAG_MARKER = make_doc('SYS_A13', 'Tag')


@pytest.fixture
def sample_export_path():
    """Path to the sample export fixture."""
    return SAMPLE_EXPORT


@pytest.fixture
def node_builder(sample_export_path):
    """Node builder with the sample export loaded and resolved."""
    builder = NodeBuilder()
    builder.load(sample_export_path)
    builder.build_all()
    return builder


@pytest.fixture
def block_builder(node_builder):
    """Block builder over the sample export."""
    builder = BlockBuilder(node_builder)
    builder.build_all()
    return builder


@pytest.fixture
def build_graph():
    """Factory building both graphs from a list of raw records."""
    def _build(docs):
        nodes = NodeBuilder()
        nodes.load_docs(docs)
        nodes.build_all()
        blocks = BlockBuilder(nodes)
        blocks.build_all()
        return nodes, blocks
    return _build
