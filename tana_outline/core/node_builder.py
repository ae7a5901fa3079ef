"""Builds the entity graph from the raw records of a Tana export."""

import json
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .exceptions import FileAccessError
from .models import ConversionProgress
from .node import DocType, Node, Props


class NodeBuilder:
    """Resolves raw export records into linked Node objects.

    Usage: construct, `load()` the export, `build_all()`, then query with
    `get()` / `contains()` / `get_nodes()`.

    A node is registered in the store as an empty stub before any of its
    links are followed, so reference cycles between records terminate.
    """

    def __init__(
        self,
        progress_callback: Optional[Callable[[ConversionProgress], None]] = None
    ):
        self.progress_callback = progress_callback
        self.doc_map: Dict[str, dict] = {}  # id -> raw record
        self.store: Dict[str, Node] = {}  # id -> resolved node

    def report_progress(self, phase: str, current: int = 0, total: int = 0, message: str = ""):
        """Send progress update."""
        if self.progress_callback:
            self.progress_callback(ConversionProgress(phase, current, total, message))

    def load(self, json_path: Path):
        """Load and index the Tana JSON file."""
        self.report_progress("Loading", message=f"Loading {json_path}...")

        try:
            with open(json_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise FileAccessError(f"JSON file not found: {json_path}")
        except json.JSONDecodeError as e:
            raise FileAccessError(f"Invalid JSON file: {e}")
        except OSError as e:
            raise FileAccessError(f"Cannot read {json_path}: {e}")

        self.load_docs(data.get('docs', []))

    def load_docs(self, docs: List[dict]):
        """Index already parsed raw records by id."""
        for doc in docs:
            self.doc_map[doc['id']] = doc
        self.report_progress("Loading", message=f"Loaded {len(self.doc_map)} documents")

    def build_all(self):
        """Resolve every raw record that has not been resolved yet."""
        total = len(self.doc_map)
        self.report_progress("Building nodes", 0, total, "Resolving nodes...")

        for idx, node_id in enumerate(self.doc_map):
            self.build_by_id(node_id)
            if (idx + 1) % 1000 == 0:
                self.report_progress("Building nodes", idx + 1, total, f"Resolved {idx + 1} nodes...")

        self.report_progress("Building nodes", total, total, f"Resolved {len(self.store)} nodes")

    def build_by_id(self, node_id: str):
        """Resolve the record with this id and everything it links to.

        Ids missing from the export are ignored.
        """
        if node_id not in self.doc_map or node_id in self.store:
            return

        pending = []
        self._reserve(node_id, pending)
        # Filling a node may reserve more stubs; drain them here instead of
        # recursing, exports can be far deeper than the recursion limit.
        while pending:
            self._fill(pending.pop(), pending)

    def get(self, node_id: str) -> Node:
        """Return a resolved node. Raises KeyError if it was never resolved."""
        return self.store[node_id]

    def contains(self, node_id: str) -> bool:
        return node_id in self.store

    def get_nodes(self) -> List[Node]:
        """Return all resolved nodes."""
        return list(self.store.values())

    def _reserve(self, node_id: str, pending: list) -> Node:
        """Register an empty stub and queue it to be filled."""
        node = Node(id=node_id)
        self.store[node_id] = node
        pending.append(node_id)
        return node

    def _link(self, node_id: Optional[str], pending: list) -> Optional[Node]:
        """Return the node for a referenced id, reserving it if needed.

        Returns None when the id is absent from the export.
        """
        if not node_id or node_id not in self.doc_map:
            return None
        if node_id in self.store:
            return self.store[node_id]
        return self._reserve(node_id, pending)

    def _fill(self, node_id: str, pending: list):
        """Resolve properties and children of a reserved stub."""
        doc = self.doc_map[node_id]
        node = self.store[node_id]

        raw_props = doc.get('props')
        if raw_props is not None:
            node.props = Props(
                created=raw_props.get('created', 0),
                name=raw_props.get('name'),
                description=raw_props.get('description'),
                doc_type=raw_props.get('_docType'),
                owner=self._link(raw_props.get('_ownerId'), pending),
                meta=self._link(raw_props.get('_metaNodeId'), pending),
                source=self._link(raw_props.get('_sourceId'), pending),
            )

        for child_id in doc.get('children') or []:
            child = self._link(child_id, pending)
            if child is not None:
                node.children.append(child)

        # Tuples (fields, meta declarations) first; stable otherwise.
        # Children may still be stubs, so read their kind from the raw record.
        node.children.sort(key=lambda child: self._raw_doc_type(child.id) is not DocType.TUPLE)

    def _raw_doc_type(self, node_id: str) -> DocType:
        props = self.doc_map[node_id].get('props') or {}
        return DocType.from_raw(props.get('_docType'))
