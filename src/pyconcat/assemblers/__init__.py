"""Assembly strategies.

``STRATEGIES`` maps the strategy keys used by :func:`pyconcat.factory.select_strategy`
to assembler *classes* (not instances).
"""

from __future__ import annotations

from pyconcat.assemblers.base import BaseAssembler
from pyconcat.assemblers.plain import PlainAssembler
from pyconcat.assemblers.position_map import PositionMapAssembler

STRATEGIES: dict[str, type[BaseAssembler]] = {
    "plain": PlainAssembler,
    "position_map": PositionMapAssembler,
}

__all__ = [
    "STRATEGIES",
    "BaseAssembler",
    "PlainAssembler",
    "PositionMapAssembler",
]
