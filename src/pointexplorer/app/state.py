from __future__ import annotations

import logging
from typing import Any, List, Optional

from PySide6.QtCore import QObject, Signal

from pointexplorer.controller.projection import ProjectedPoint, ProjectionEngine, WindowConfig
from pointexplorer.model.points import PointBatch
from pointexplorer.model.state import DataManager

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central session store with signals for view sync."""
    data_changed = Signal(object)
    filters_changed = Signal(int)
    data_cleared = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.data_manager = DataManager()
        self.engine = ProjectionEngine()

    def load(self, batch: PointBatch) -> None:
        """Index a new batch and hand it to the projection engine."""
        self.data_manager.set_data(batch)
        self.engine.set_data(batch)
        self.data_changed.emit(batch)

    def restore(self, history_index: int) -> None:
        self.data_manager.restore_from_history(history_index)
        batch = self.data_manager.get_data()
        self.engine.set_data(batch)
        self.data_changed.emit(batch)

    def update_filter(self, dim_index: int, **updates: Any) -> None:
        self.engine.update_filter(dim_index, **updates)
        self.filters_changed.emit(dim_index)

    def reset_filters(self) -> None:
        self.engine.reset_filters()
        for dim in self.engine.get_filters():
            self.filters_changed.emit(dim)

    def project(self, x_dim: int, y_dim: int, window: Optional[WindowConfig] = None) -> List[ProjectedPoint]:
        if not self.data_manager.has_data():
            return []
        return self.engine.project_2d(x_dim, y_dim, window)

    def clear(self) -> None:
        self.data_manager.clear_data()
        self.engine = ProjectionEngine()
        self.data_cleared.emit()
