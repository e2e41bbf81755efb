"""
Session State (Data Model)
==========================
This module defines the central data structure for a running session.

Why is this file needed?
------------------------
1. State Management: It holds the current batch and the grid built from it in
   one place.
2. History: Replaced batches are kept (up to MAX_HISTORY_SIZE) so an earlier
   data set can be restored without regenerating it.
3. Decoupling: The projection engine and exporters read from this object;
   generators write to it.

Classes:
    HistoryEntry: One replaced batch with its grid.
    DimensionRange: Name, range and interval of one axis.
    DataManager: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Any, Dict, List, Optional, Tuple

from pointexplorer.config import MAX_HISTORY_SIZE
from pointexplorer.model.grid import PointGrid
from pointexplorer.model.points import PointBatch, PointRecord

logger = logging.getLogger(__name__)


@dataclass
class HistoryEntry:
    batch: PointBatch
    grid: PointGrid
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class DimensionRange:
    name: str
    min: float
    max: float
    interval: float


@dataclass
class DataManager:
    """
    Owns the current batch and its grid for one session.
    """
    max_history_size: int = MAX_HISTORY_SIZE

    current_batch: Optional[PointBatch] = None
    current_grid: Optional[PointGrid] = None
    history: List[HistoryEntry] = field(default_factory=list)

    def set_data(self, batch: PointBatch) -> None:
        """Make `batch` current and index it in a new grid."""
        if self.current_batch is not None:
            self._save_to_history()

        grid = PointGrid.create(batch.axes)
        for point in batch.points:
            grid.add_point(point)

        self.current_batch = batch
        self.current_grid = grid
        logger.info(f"Data set: {len(batch)} points, {grid.occupied_count()} occupied cells.")

    def get_data(self) -> Optional[PointBatch]:
        return self.current_batch

    def get_grid(self) -> Optional[PointGrid]:
        return self.current_grid

    def get_metadata(self) -> Optional[Dict[str, Any]]:
        return self.current_batch.metadata() if self.current_batch else None

    def get_points(self) -> Tuple[PointRecord, ...]:
        return self.current_batch.points if self.current_batch else ()

    def has_data(self) -> bool:
        return self.current_batch is not None

    def clear_data(self) -> None:
        """Drop the current batch. History is kept."""
        self.current_batch = None
        self.current_grid = None
        logger.info("Session data cleared.")

    def _save_to_history(self) -> None:
        self.history.append(HistoryEntry(batch=self.current_batch, grid=self.current_grid))
        if len(self.history) > self.max_history_size:
            self.history.pop(0)

    def restore_from_history(self, index: int) -> None:
        if index < 0 or index >= len(self.history):
            raise IndexError("Invalid history index")
        entry = self.history[index]
        self.current_batch = entry.batch
        self.current_grid = entry.grid
        logger.info(f"Restored batch {index} from history ({entry.timestamp:%H:%M:%S}).")

    def get_history_list(self) -> List[Dict[str, Any]]:
        return [
            {
                "index": i,
                "timestamp": entry.timestamp,
                "pointCount": len(entry.batch),
                "dimensions": entry.batch.dim_count,
                "valueType": entry.batch.value_kind,
            }
            for i, entry in enumerate(self.history)
        ]

    def get_dimension_info(self) -> Optional[Dict[str, Any]]:
        if self.current_batch is None:
            return None
        axes = self.current_batch.axes
        return {
            "count": axes.dim_count,
            "names": list(axes.names),
            "ranges": [self.get_dimension_range(i) for i in range(axes.dim_count)],
        }

    def get_dimension_range(self, dim_index: int) -> Optional[DimensionRange]:
        if self.current_batch is None or not 0 <= dim_index < self.current_batch.dim_count:
            return None
        axes = self.current_batch.axes
        return DimensionRange(
            name=axes.names[dim_index],
            min=axes.mins[dim_index],
            max=axes.maxs[dim_index],
            interval=axes.intervals[dim_index],
        )
