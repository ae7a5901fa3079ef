from .models import (
    ConversionSettings,
    ConversionProgress,
    ConversionResult,
)
from .exceptions import ConversionError, InvalidPathError, FileAccessError, MalformedExportError
from .node import DocType, Node, Props
from .node_builder import NodeBuilder
from .block import Block
from .block_builder import BlockBuilder
from .converter import TanaToOutline

__all__ = [
    'ConversionSettings',
    'ConversionProgress',
    'ConversionResult',
    'ConversionError',
    'InvalidPathError',
    'FileAccessError',
    'MalformedExportError',
    'DocType',
    'Node',
    'Props',
    'NodeBuilder',
    'Block',
    'BlockBuilder',
    'TanaToOutline',
]
