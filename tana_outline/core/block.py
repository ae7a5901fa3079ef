"""Page graph model and outline serialization.

A Block is the rendering view of a Node. Blocks that qualify as pages get
their own file; every other block is inlined as a bullet inside the page
that reaches it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .node import DocType, FIELD_DEFINITION_TAG, SUPERTAG_TAG, TODO_TAG

INDENT = '  '
METADATA_VALUE_INDENT = '    '

# Serializer stack items
_RENDER = 'render'
_LINE = 'line'
_LEAVE = 'leave'


@dataclass(eq=False)
class Block:
    """The rendering view of a node: title, tags, fields and child blocks."""
    id: str
    title: str = ''
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    metadata: Dict[str, List['Block']] = field(default_factory=dict)  # field name -> values
    children: List['Block'] = field(default_factory=list)
    doc_type: DocType = DocType.TEXT
    ref_count: int = 0  # times attached as a child elsewhere

    def __repr__(self):
        return f"Block(id={self.id!r}, title={self.title!r}, page={self.is_page()})"

    @property
    def link(self) -> str:
        return f'[[{self.title}]]'

    def is_page(self) -> bool:
        """Check if this block gets its own file.

        Untitled blocks and field/supertag definitions never do. Otherwise a
        text block is a page when it has a tag other than #todo, or fields.
        """
        if not self.title:
            return False
        if FIELD_DEFINITION_TAG in self.tags or SUPERTAG_TAG in self.tags:
            return False
        if self.doc_type is not DocType.TEXT:
            return False

        has_tag = any(tag != TODO_TAG for tag in self.tags)
        return has_tag or bool(self.metadata)

    def get_content(self, level: int = 0, expand: bool = True) -> List[str]:
        """Render this block as outline lines.

        A page rendered with `expand=False` is only a link to its own file.
        Pages start a fresh indentation frame; other blocks nest their
        metadata and children one level deeper. Nested blocks are expanded
        from an explicit stack, so outline depth is not bounded by the
        recursion limit.
        """
        lines = []
        path = set()  # ids of the blocks being expanded around the current frame
        stack = [(_RENDER, self, level, expand, '')]

        while stack:
            item = stack.pop()
            if item[0] == _LINE:
                lines.append(item[1])
            elif item[0] == _LEAVE:
                path.discard(item[1])
            else:
                _, block, block_level, block_expand, line_prefix = item
                stack.extend(reversed(block._frame(block_level, block_expand, line_prefix, path)))

        return lines

    def _frame(self, level: int, expand: bool, line_prefix: str, path: Set[str]) -> list:
        """Lines and nested blocks of this block, in output order."""
        is_page = self.is_page()
        prefix = line_prefix + INDENT * level

        # A fragment that contains itself is cut off with a link
        if (is_page and not expand) or self.id in path:
            return [(_LINE, f'{prefix}- {self.link}')]
        path.add(self.id)

        items = []
        next_level = level if is_page else level + 1

        if is_page:
            items.append((_LINE, f'{prefix}title:: {self.title}'))

        if self.tags:
            tags = ' '.join(f'#{tag}' for tag in self.tags)
            if is_page:
                items.append((_LINE, f'{prefix}tags:: {tags}'))
            else:
                items.append((_LINE, f'{prefix}- {tags} {self.title}'))
        elif not is_page:
            items.append((_LINE, f'{prefix}- {self.title}'))

        if self.metadata or self.description is not None:
            meta_prefix = prefix if is_page else line_prefix + INDENT * next_level
            items.append((_LINE, f'{meta_prefix}- Metadata'))
            if self.description is not None:
                items.append((_LINE, f'{meta_prefix}  - Description: {self.description}'))

            # Values render at the next level, shifted by the value indent
            value_prefix = line_prefix + METADATA_VALUE_INDENT
            for key, values in self.metadata.items():
                items.append((_LINE, f'{meta_prefix}  - {key}'))
                for value in values:
                    items.append((_RENDER, value, next_level, False, value_prefix))

        for child in self.children:
            items.append((_RENDER, child, next_level, False, line_prefix))

        items.append((_LEAVE, self.id))
        return items

    def render(self) -> str:
        """Render this block as a standalone page document."""
        return '\n'.join(self.get_content(0, True))
