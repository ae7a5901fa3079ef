"""Builds the page graph from the entity graph and writes the pages."""

import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

from .block import Block
from .exceptions import FileAccessError
from .models import ConversionProgress
from .node import DocType, Node
from .node_builder import NodeBuilder

# <span data-inlineref-node="ID" ...>alias</span>
INLINE_REF_PATTERN = re.compile(r'<span data-inlineref-node="([^"]*)"[^>]*>([^<]*)</span>')

# Characters that are invalid in file names on at least one platform
INVALID_FILENAME_CHARS = '<>:"/\\|?*\n\r\t'
# Linux allows 255 bytes per name; keep room for the extension and a counter
MAX_FILENAME_BYTES = 150


class BlockBuilder:
    """Turns resolved nodes into blocks: titles, tags, fields and children.

    A block is registered with its title before its children are
    classified, so blocks that reach themselves again are built once.
    """

    def __init__(
        self,
        node_builder: NodeBuilder,
        progress_callback: Optional[Callable[[ConversionProgress], None]] = None
    ):
        self.node_builder = node_builder
        self.progress_callback = progress_callback
        self.store: Dict[str, Block] = {}  # id -> block
        self._filled: Set[str] = set()  # ids whose children were classified
        self.written: List[Path] = []  # files from the last write_pages()

    def report_progress(self, phase: str, current: int = 0, total: int = 0, message: str = ""):
        """Send progress update."""
        if self.progress_callback:
            self.progress_callback(ConversionProgress(phase, current, total, message))

    def build_all(self):
        """Build a block for every node that is outside the trash and not a system node."""
        nodes = self.node_builder.get_nodes()
        total = len(nodes)
        self.report_progress("Building blocks", 0, total, "Building blocks...")

        for idx, node in enumerate(nodes):
            if node.is_in_trash() or node.is_system_node():
                continue
            self.build(node)
            if (idx + 1) % 1000 == 0:
                self.report_progress("Building blocks", idx + 1, total, f"Processed {idx + 1} nodes...")

        self.report_progress("Building blocks", total, total,
                             f"Built {len(self.store)} blocks, {len(self.get_pages())} pages")

    def build(self, node: Node) -> Optional[Block]:
        """Build the block for `node` and everything below it.

        Nodes without properties have no block; None is returned for them.
        """
        if node.props is None:
            return None
        if node.id in self._filled:
            return self.store[node.id]

        pending = []
        block = self._reserve(node, pending)
        pending.append(node.id)
        while pending:
            self._fill(pending.pop(), pending)
        return block

    def build_by_id(self, node_id: str) -> Optional[Block]:
        """Build the block for a resolved node id, if there is such a node."""
        if not self.node_builder.contains(node_id):
            return None
        return self.build(self.node_builder.get(node_id))

    def get_block(self, block_id: str) -> Block:
        return self.store[block_id]

    def contains(self, block_id: str) -> bool:
        return block_id in self.store

    def get_blocks(self) -> List[Block]:
        """Return all built blocks."""
        return list(self.store.values())

    def get_pages(self) -> List[Block]:
        """Return the blocks that are written as their own file."""
        return [block for block in self.store.values() if block.is_page()]

    def write_pages(self, output_dir: Path) -> int:
        """Write every page to `<output_dir>/<title>.md`. Returns the file count.

        Titles are sanitized into file names; pages whose names collide get
        a ` (2)`, ` (3)`... suffix. The written paths are kept in `written`.
        """
        output_dir = Path(output_dir)
        pages = self.get_pages()
        total = len(pages)
        self.report_progress("Writing", 0, total, f"Writing {total} pages...")

        used_filenames = set()  # lowercased, for case-insensitive filesystems
        self.written = []
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            for idx, block in enumerate(pages):
                filename = _unique_filename(page_filename(block.title), used_filenames)
                file_path = output_dir / f'{filename}.md'
                with open(file_path, 'w', encoding='utf-8') as f:
                    f.write(block.render())
                self.written.append(file_path)

                if (idx + 1) % 100 == 0:
                    self.report_progress("Writing", idx + 1, total, f"Wrote {idx + 1} pages...")
        except OSError as e:
            raise FileAccessError(f"Cannot write pages to {output_dir}: {e}")

        self.report_progress("Writing", total, total, f"Wrote {total} pages")
        return total

    emit = write_pages

    def _reserve(self, node: Node, pending: list) -> Block:
        """Return the block for `node`, creating it with its title if needed."""
        if node.id in self.store:
            return self.store[node.id]

        block = Block(
            id=node.id,
            description=node.description,
            tags=node.tag_list(),
            doc_type=node.doc_type,
        )
        self.store[node.id] = block
        block.title = self._resolve_title(node, pending)
        return block

    def _resolve_title(self, node: Node, pending: list) -> str:
        """Replace inline node references in the name with links to their blocks."""
        name = node.name
        if name is None:
            return ''

        def replace_ref(match):
            ref_id = match.group(1)
            if not self.node_builder.contains(ref_id):
                return match.group(2)

            ref_node = self.node_builder.get(ref_id)
            if ref_node.props is None:
                return match.group(2)

            ref_block = self._reserve(ref_node, pending)
            pending.append(ref_id)
            return ref_block.link

        return INLINE_REF_PATTERN.sub(replace_ref, name)

    def _fill(self, block_id: str, pending: list):
        """Sort the node's children into block children and field metadata."""
        if block_id in self._filled:
            return
        self._filled.add(block_id)

        block = self.store[block_id]
        node = self.node_builder.get(block_id)

        for child in node.children:
            if child.props is None or child.is_in_trash() or child.is_system_node():
                continue

            child_block = self._reserve(child, pending)
            pending.append(child.id)

            if child_block.doc_type is DocType.TEXT:
                child_block.ref_count += 1
                block.children.append(child_block)
            elif child_block.doc_type is DocType.TUPLE:
                # The field's key and values are the tuple's own children
                self._fill(child.id, pending)
                if len(child_block.children) < 2:
                    continue
                key, *values = child_block.children
                block.metadata[key.title] = values


def page_filename(title: str) -> str:
    """Create a safe file name (without extension) from a page title."""
    name = title
    for char in INVALID_FILENAME_CHARS:
        name = name.replace(char, '-')

    # Collapse multiple dashes and spaces
    name = re.sub(r'-+', '-', name)
    name = re.sub(r'\s+', ' ', name)
    name = name.strip('-. ')

    # Truncate by byte length, dropping a split trailing character
    encoded = name.encode('utf-8')
    if len(encoded) > MAX_FILENAME_BYTES:
        name = encoded[:MAX_FILENAME_BYTES].decode('utf-8', errors='ignore')
        name = name.strip('-. ')

    return name if name else 'Untitled'


def _unique_filename(name: str, used: Set[str]) -> str:
    """Return `name`, or `name (N)` for the first N not yet in `used`, and record it."""
    candidate = name
    counter = 2
    while candidate.lower() in used:
        candidate = f'{name} ({counter})'
        counter += 1
    used.add(candidate.lower())
    return candidate
