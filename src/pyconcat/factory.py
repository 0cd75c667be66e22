"""Strategy selection for a concatenation unit."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pyconcat._constants import DEFAULT_MAP_EXTENSIONS
from pyconcat.assemblers import STRATEGIES, BaseAssembler, PositionMapAssembler
from pyconcat.config import ConcatConfig
from pyconcat.mapping.cache import EncoderCache
from pyconcat.mapping.resolver import Reader, WarningSink

_logger = logging.getLogger(__name__)


def select_strategy(
    output_name: str,
    *,
    source_maps: bool = True,
    map_extensions: Iterable[str] = DEFAULT_MAP_EXTENSIONS,
) -> type[BaseAssembler]:
    """Pick the map-aware strategy when the output has a mapped extension."""
    if source_maps:
        for extension in map_extensions:
            if output_name.endswith("." + extension.lstrip(".")):
                return STRATEGIES["position_map"]
    return STRATEGIES["plain"]


def create_assembler(
    config: ConcatConfig,
    *,
    source_maps: bool = True,
    map_extensions: Iterable[str] = DEFAULT_MAP_EXTENSIONS,
    unit_ids: Iterator[int] | None = None,
    cache: EncoderCache | None = None,
    reader: Reader | None = None,
    warn: WarningSink | None = None,
) -> BaseAssembler:
    """Create the assembler for one concatenation unit.

    Parameters
    ----------
    config : ConcatConfig
        Unit configuration.
    source_maps : bool
        Set to ``False`` to always concatenate without a map.
    map_extensions : iterable of str
        Output extensions (with or without the dot) that get a map.
    unit_ids : iterator of int or None
        Caller-owned id sequence, e.g. ``itertools.count(1)``.  The next
        value becomes the assembler's ``unit_id``.
    cache : EncoderCache or None
        Shared encoder cache for map-aware assemblers.
    reader : callable or None
        Reads referenced maps and sources.  Defaults to the filesystem.
    warn : callable or None
        Receives :class:`~pyconcat.exceptions.ExternalMapResolutionWarning`.

    Returns
    -------
    BaseAssembler
        A :class:`PositionMapAssembler` or a :class:`PlainAssembler`.
    """
    unit_id = next(unit_ids) if unit_ids is not None else None
    strategy = select_strategy(config.output_name, source_maps=source_maps, map_extensions=map_extensions)
    _logger.debug("Unit %s (%s) uses the %s strategy", unit_id, config.output_name, strategy.name)

    if strategy is PositionMapAssembler:
        return PositionMapAssembler(config, unit_id=unit_id, cache=cache, reader=reader, warn=warn)
    return strategy(config, unit_id=unit_id)
