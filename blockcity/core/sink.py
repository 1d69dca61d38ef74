"""Placement sinks: where generated placement requests end up."""

from __future__ import annotations

from typing import List, Protocol

from blockcity.protocol import AssetRef, PlacementRequest, Transform


class PlacementSink(Protocol):
    def place(self, asset: AssetRef, transform: Transform, block) -> int:
        """Instantiate one asset and return an opaque handle for it."""
        ...


class RecordingSink:
    """Keeps every request in insertion order; the handle is the list index."""

    def __init__(self):
        self.placements: List[PlacementRequest] = []

    def place(self, asset: AssetRef, transform: Transform, block) -> int:
        self.placements.append(PlacementRequest(asset, transform, tuple(block)))
        return len(self.placements) - 1

    def __len__(self) -> int:
        return len(self.placements)

    def count(self, category) -> int:
        return sum(1 for p in self.placements if p.asset.category == category)


class ForwardingSink(RecordingSink):
    """Records every request and hands it on to a host sink, returning the host's handle."""

    def __init__(self, target: PlacementSink):
        super().__init__()
        self.target = target

    def place(self, asset: AssetRef, transform: Transform, block) -> int:
        super().place(asset, transform, block)
        return self.target.place(asset, transform, block)
