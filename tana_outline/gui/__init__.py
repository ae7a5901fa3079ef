from .app import TanaToOutlineApp, launch
from .components import PathField, ProgressPanel, ResultTabs

__all__ = [
    'TanaToOutlineApp',
    'launch',
    'PathField',
    'ProgressPanel',
    'ResultTabs',
]
