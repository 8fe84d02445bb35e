# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - in-memory data and listeners.

The package is organized into:
- core: PathTree with path traversal, read, write, merge and delete
- loading: Functions converting plain mappings into tree nodes
- subscription: ListenerRegistry and event dispatch

Example:
    >>> from genro_firestub.store import PathTree
    >>> tree = PathTree()
    >>> tree.write('config/name', 'MyApp')
    >>> tree.read('config')
    {'name': 'MyApp'}
"""

from .core import PathTree
from .subscription import ListenerRegistry, Subscription

__all__ = ["PathTree", "ListenerRegistry", "Subscription"]
