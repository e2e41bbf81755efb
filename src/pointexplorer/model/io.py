"""
Input/Output Manager
Handles exporting batches to JSON / CSV and saving them to .h5 files.
"""
import csv
import io
import json
import logging
import os
import time
from datetime import datetime, timezone
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, List

import h5py
import numpy as np

from pointexplorer.model.errors import ValidationError
from pointexplorer.model.points import AxisMetadata, PointBatch, PointRecord
from pointexplorer.model.values import ValueKind, ValueVariant

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("pointexplorer")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

H5_FORMAT = "pointexplorer-batch"


class IOManager:

    # ---- TEXT EXPORTS ----
    @staticmethod
    def export_json(batch: PointBatch, pretty: bool = True) -> str:
        return json.dumps(batch.to_dict(), indent=2 if pretty else None)

    @staticmethod
    def import_json(text: str) -> PointBatch:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}") from e
        return PointBatch.from_dict(data)

    @staticmethod
    def _value_headers(batch: PointBatch) -> List[str]:
        kind = batch.value_kind
        if kind is None:
            raise ValueError("CSV export requires all points to share one value type")

        if kind in (ValueKind.VECTOR, ValueKind.LABELED_VECTOR):
            size = batch.vector_size or max(len(p.value.components) for p in batch.points)
            components = [f"value_{i}" for i in range(size)]
            return components if kind == ValueKind.VECTOR else ["label", *components]
        elif kind == ValueKind.SCALAR:
            return ["value"]
        elif kind == ValueKind.RANGE:
            return ["min", "max"]
        else:  # ValueKind.LABELED_SCALAR
            return ["label", "number"]

    @staticmethod
    def export_csv(batch: PointBatch) -> str:
        """One row per point: coordinates followed by the value columns."""
        if not batch.points:
            raise ValueError("No data to export")

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow([*batch.axes.names, *IOManager._value_headers(batch)])
        for point in batch.points:
            writer.writerow([*point.coordinates, *point.value.to_columns()])
        return buffer.getvalue()

    @staticmethod
    def export_metadata(batch: PointBatch) -> str:
        return json.dumps({
            "exportDate": datetime.now(timezone.utc).isoformat(),
            "metadata": batch.metadata(),
        }, indent=2)

    @staticmethod
    def generate_summary(batch: PointBatch) -> Dict[str, Any]:
        """Observed per-axis statistics next to the configured ranges."""
        axes = batch.axes
        coords = np.array([p.coordinates for p in batch.points], dtype=np.float64).reshape(-1, axes.dim_count)

        dimension_stats = []
        for i, name in enumerate(axes.names):
            column = coords[:, i]
            has_points = column.size > 0
            dimension_stats.append({
                "name": name,
                "min": float(column.min()) if has_points else None,
                "max": float(column.max()) if has_points else None,
                "mean": float(column.mean()) if has_points else None,
                "configuredMin": axes.mins[i],
                "configuredMax": axes.maxs[i],
                "interval": axes.intervals[i],
            })

        kind = batch.value_kind
        return {
            "generatedAt": datetime.now(timezone.utc).isoformat(),
            "totalPoints": len(batch),
            "dimensions": axes.dim_count,
            "valueType": kind.value if kind else None,
            "vectorSize": batch.vector_size,
            "dimensionStats": dimension_stats,
        }

    @staticmethod
    def export_subset(batch: PointBatch, start: int = 0, count: int = 100) -> PointBatch:
        points = batch.points[start:start + count]
        extra = dict(batch.extra)
        extra.update({"isSubset": True, "subsetStart": start, "totalPoints": len(batch)})
        return PointBatch(axes=batch.axes, points=points, vector_size=batch.vector_size, extra=extra)

    @staticmethod
    def timestamped_filename(prefix: str, extension: str) -> str:
        return f"{prefix}_{int(time.time() * 1000)}.{extension}"

    @staticmethod
    def write_text(content: str, filepath: str) -> None:
        try:
            directory = os.path.dirname(filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(filepath, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            logger.info(f"Exported {len(content)} characters to: {filepath}")
        except OSError as e:
            logger.exception(f"Failed to write export file: {e}")
            raise

    # ---- HDF5 ----
    @staticmethod
    def save_batch(batch: PointBatch, filepath: str) -> None:
        logger.info(f"Saving batch to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["format"] = H5_FORMAT
                meta = {"vectorSize": batch.vector_size, **batch.extra}
                f.attrs["metadata_json"] = json.dumps(meta)

                # --- 1. AXES ---
                axes = batch.axes
                grp_axes = f.create_group("axes")
                grp_axes.create_dataset("names", data=np.array(axes.names, dtype=object),
                                        dtype=h5py.string_dtype())
                grp_axes.create_dataset("mins", data=np.array(axes.mins))
                grp_axes.create_dataset("maxs", data=np.array(axes.maxs))
                grp_axes.create_dataset("intervals", data=np.array(axes.intervals))

                # --- 2. POINTS ---
                # Coordinates as an (N, D) matrix, values as one JSON string per point
                coords = np.array([p.coordinates for p in batch.points], dtype=np.float64)
                f.create_dataset("coordinates", data=coords.reshape(-1, axes.dim_count),
                                 compression="gzip" if batch.points else None)
                values = np.array([json.dumps(p.value.to_dict()) for p in batch.points], dtype=object)
                f.create_dataset("values", data=values, dtype=h5py.string_dtype())

            logger.info(f"Batch saved ({len(batch)} points).")

        except Exception as e:
            logger.exception(f"Failed to save batch: {e}")
            raise e

    @staticmethod
    def load_batch(filepath: str) -> PointBatch:
        logger.info(f"Loading batch from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        try:
            with h5py.File(filepath, "r") as f:
                if f.attrs.get("format") != H5_FORMAT:
                    raise ValidationError(f"File '{filepath}' does not contain a point batch.")
                meta = json.loads(f.attrs.get("metadata_json", "{}"))

                grp_axes = f["axes"]
                axes = AxisMetadata(
                    names=grp_axes["names"].asstr()[()].tolist(),
                    mins=grp_axes["mins"][:].tolist(),
                    maxs=grp_axes["maxs"][:].tolist(),
                    intervals=grp_axes["intervals"][:].tolist(),
                )

                coords = f["coordinates"][:]
                raw_values = f["values"].asstr()[()].tolist()
                points = [
                    PointRecord(axes=axes, coordinates=row.tolist(), value=ValueVariant.from_dict(json.loads(raw)))
                    for row, raw in zip(coords, raw_values)
                ]

            vector_size = meta.pop("vectorSize", None)
            logger.info(f"Batch loaded ({len(points)} points).")
            return PointBatch(axes=axes, points=tuple(points), vector_size=vector_size, extra=meta)

        except Exception as e:
            logger.exception(f"Failed to load batch: {e}")
            raise e
