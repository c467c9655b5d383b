"""
Cascade Index Module
====================

Fractional cascading over cyclic edge slopes ("M-lists").

Design:
- One CascadeList per layer, built innermost first
- Entries reference layer edges by (layer, index); no geometry copies
- layer_ptr / parent_ptr precomputed at build time so query descent
  never searches again
- Construction searches are numpy.searchsorted (O(log n) each)

Invariants:
    len(M_i) == len(L_i) + ceil(len(M_{i+1}) / 2)
    innermost M == its own L
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from onion_layers.construction.layer import Layer
from onion_layers.geometry.primitives import circular_gap
from onion_layers.logging import StructuredLogger, LogEvent


@dataclass(frozen=True)
class CascadeEntry:
    """
    One slot of a cascade list.

    Attributes:
        source_layer: Layer owning the edge this entry stands for
        source_idx: Edge index within that layer
        layer_ptr: Predecessor edge, by slope, in this list's own layer
        parent_ptr: Predecessor entry, by slope, in the next-inner list
            (0 for the innermost list)
    """

    source_layer: int
    source_idx: int
    layer_ptr: int
    parent_ptr: int


@dataclass(frozen=True, eq=False)
class CascadeList:
    """
    Slope-sorted cascade list of one layer.

    Attributes:
        layer_index: Layer this list belongs to
        entries: Entries in ascending slope order
        slopes: (K,) slope of every entry, read-only
    """

    layer_index: int
    entries: Tuple[CascadeEntry, ...]
    slopes: np.ndarray

    def __post_init__(self):
        """Validate and freeze."""
        if len(self.entries) == 0:
            raise ValueError(f"Cascade list {self.layer_index} is empty")
        if self.slopes.shape != (len(self.entries),):
            raise ValueError(
                f"slopes must have shape ({len(self.entries)},), got {self.slopes.shape}"
            )
        self.slopes.flags.writeable = False

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, idx: int) -> CascadeEntry:
        return self.entries[idx]

    def predecessor(self, key: float) -> int:
        """
        Circular predecessor: last entry whose slope is <= key, or the
        last entry when key is below every slope. O(log K).
        """
        idx = int(np.searchsorted(self.slopes, key, side="right")) - 1
        return idx % len(self.entries)

    def resolve(self, candidate: int, key: float) -> int:
        """
        Correct a carried-over pointer to the true predecessor of key.

        Only the candidate and its immediate circular neighbours are
        inspected; the closest one counter-clockwise before key wins,
        the later one on ties. O(1).
        """
        size = len(self.entries)
        best = candidate % size
        best_gap = circular_gap(float(self.slopes[best]), key)
        for offset in (-1, 1):
            idx = (candidate + offset) % size
            gap = circular_gap(float(self.slopes[idx]), key)
            if gap < best_gap or (gap == best_gap and offset > 0):
                best, best_gap = idx, gap
        return best


class CascadeBuilder:
    """
    Builds the cascade lists for a stack of layers.

    Usage:
        cascades = CascadeBuilder().build(layers)
        # cascades[i] belongs to layers[i]; cascades[0] is the outermost
    """

    def __init__(self, logger: Optional[StructuredLogger] = None):
        """
        Args:
            logger: Structured logger (default: "cascade" component)
        """
        self.logger = logger or StructuredLogger(component="cascade", level=None)

    def build(self, layers: Sequence[Layer]) -> Tuple[CascadeList, ...]:
        """
        Build every cascade list, innermost first.

        Args:
            layers: Layers ordered outermost first

        Returns:
            Cascade lists in the same order as layers
        """
        if not layers:
            return ()

        cascades: List[CascadeList] = [self.base_case(layers[-1])]
        for layer in reversed(layers[:-1]):
            cascades.append(self.merge(layer, cascades[-1]))

        for cascade in cascades:
            self.logger.debug(
                event=LogEvent.CASCADE_LIST_BUILT,
                message=f"Cascade list {cascade.layer_index} built",
                metadata={
                    'layer_index': cascade.layer_index,
                    'layer_size': len(layers[cascade.layer_index]),
                    'cascade_size': len(cascade),
                }
            )

        cascades.reverse()
        return tuple(cascades)

    @staticmethod
    def base_case(layer: Layer) -> CascadeList:
        """Innermost list: one entry per edge, no parent."""
        entries = tuple(
            CascadeEntry(
                source_layer=layer.index,
                source_idx=k,
                layer_ptr=k,
                parent_ptr=0,
            )
            for k in range(len(layer))
        )
        return CascadeList(
            layer_index=layer.index,
            entries=entries,
            slopes=np.array(layer.slopes, dtype=float),
        )

    @staticmethod
    def merge(layer: Layer, inner: CascadeList) -> CascadeList:
        """
        Merge a layer's own edges with every second entry of the
        next-inner list, then link both pointer kinds.

        Args:
            layer: Layer i
            inner: Cascade list of layer i + 1

        Returns:
            Cascade list of layer i
        """
        # (slope, own-first rank, source_layer, source_idx)
        combined = [
            (float(layer.slopes[k]), 0, layer.index, k)
            for k in range(len(layer))
        ]
        for j in range(0, len(inner), 2):
            carried = inner[j]
            combined.append((
                float(inner.slopes[j]),
                1,
                carried.source_layer,
                carried.source_idx,
            ))

        # Stable: equal slopes keep own edges first, then pre-sort order
        combined.sort(key=lambda item: (item[0], item[1]))

        slopes = np.array([item[0] for item in combined], dtype=float)
        layer_ptrs = np.searchsorted(layer.slopes, slopes, side="right") - 1
        parent_ptrs = np.searchsorted(inner.slopes, slopes, side="right") - 1

        entries = tuple(
            CascadeEntry(
                source_layer=source_layer,
                source_idx=source_idx,
                layer_ptr=int(layer_ptrs[n]) % len(layer),
                parent_ptr=int(parent_ptrs[n]) % len(inner),
            )
            for n, (_, _, source_layer, source_idx) in enumerate(combined)
        )
        return CascadeList(layer_index=layer.index, entries=entries, slopes=slopes)
