"""Entity graph model for a Tana export.

A Node is one resolved record of the export. Links to other records
(owner, meta node, source, children) point at other Node objects held by
the NodeBuilder store, so a node may be shared by several parents.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .exceptions import MalformedExportError


# Reserved ids and tags used by Tana exports
TRASH_SUFFIX = '_TRASH'
SYSTEM_PREFIX = 'SYS'
SUPERTAGS_META_ID = 'SYS_A13'  # First child of a meta tuple listing supertags

FIELD_DEFINITION_TAG = 'field-definition'
SUPERTAG_TAG = 'supertag'
TODO_TAG = 'todo'


class DocType(Enum):
    """Kinds of records the converter distinguishes."""
    TEXT = 'text'
    CODEBLOCK = 'codeblock'
    SEARCH = 'search'
    TUPLE = 'tuple'

    @classmethod
    def from_raw(cls, raw: Optional[str]) -> 'DocType':
        """Map an export `_docType` string to a DocType. Unknown kinds are TEXT."""
        if raw in ('tuple', 'codeblock', 'search'):
            return cls(raw)
        return cls.TEXT


@dataclass
class Props:
    """Resolved properties of a node."""
    created: int = 0
    name: Optional[str] = None
    description: Optional[str] = None
    doc_type: Optional[str] = None  # raw `_docType` string
    owner: Optional['Node'] = None
    meta: Optional['Node'] = None
    source: Optional['Node'] = None


@dataclass(eq=False)
class Node:
    """A record of the export with its links resolved.

    `props` stays None for records that carry no properties.
    """
    id: str
    children: List['Node'] = field(default_factory=list)
    props: Optional[Props] = None

    def __repr__(self):
        return f"Node(id={self.id!r}, name={self.name!r}, children={len(self.children)})"

    @property
    def name(self) -> Optional[str]:
        return self.props.name if self.props else None

    @property
    def description(self) -> Optional[str]:
        return self.props.description if self.props else None

    @property
    def owner(self) -> Optional['Node']:
        return self.props.owner if self.props else None

    @property
    def meta_node(self) -> Optional['Node']:
        return self.props.meta if self.props else None

    @property
    def doc_type(self) -> DocType:
        return DocType.from_raw(self.props.doc_type if self.props else None)

    def tag_list(self) -> List[str]:
        """Get the supertag names declared in this node's meta node.

        The meta node holds tuples. A tuple whose first child is SYS_A13
        declares supertags; its remaining children are the tag definitions.
        """
        meta_node = self.meta_node
        if meta_node is None:
            return []

        for item in meta_node.children:
            tags = _supertags_from_tuple(item)
            if tags is not None:
                return tags
        return []

    def is_in_trash(self) -> bool:
        """Check if this node or any of its owners is a trash node."""
        if self.id.endswith(TRASH_SUFFIX):
            return True

        visited = {self.id}
        owner = self.owner
        while owner is not None:
            if owner.id.endswith(TRASH_SUFFIX):
                return True
            # Owner chains that loop without reaching the trash are not trashed
            if owner.id in visited:
                return False
            visited.add(owner.id)
            owner = owner.owner

        return False

    def is_system_node(self) -> bool:
        """Check if this is an internal Tana node (SYS_*)."""
        return self.id.startswith(SYSTEM_PREFIX)


def _supertags_from_tuple(node: Node) -> Optional[List[str]]:
    """Read the tag names of a supertag declaration, or None if `node` isn't one."""
    if node.props is None or node.props.doc_type != 'tuple':
        return None
    if not node.children or node.children[0].id != SUPERTAGS_META_ID:
        return None

    tags = []
    for tag_node in node.children[1:]:
        if tag_node.name is None:
            raise MalformedExportError(
                f"Supertag {tag_node.id} declared in {node.id} has no name"
            )
        tags.append(tag_node.name)
    return tags
