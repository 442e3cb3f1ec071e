"""
Variable Context
================

Build the variable mapping handed to the template engine.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


def build_context(data: Optional[Mapping[str, Any]] = None, **computed: Any) -> Mapping[str, Any]:
    """
    Merge caller data with computed variables.

    Layers are applied in order, caller data first and computed variables
    second, so a computed ``layout`` always wins over one supplied by the
    caller.

    Args:
        data: Caller-supplied template variables
        **computed: Variables computed by the renderer, e.g. ``layout``

    Returns:
        Read-only variable mapping
    """
    context: Dict[str, Any] = dict(data or {})
    context.update(computed)
    return MappingProxyType(context)
